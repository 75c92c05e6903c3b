from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from core.health_check import database_is_reachable, health_check
from core.log import logger
from core.responses import handle_http_exception
from routes.auth import router as auth_router
from routes.ticket import router as ticket_router
from routes.event import router as event_router
from routes.entry_gate import router as entry_gate_router
from routes.order import router as order_router
from routes.social_review import router as social_review_router
from routes.refund import router as refund_router
from routes.admin_user import router as admin_user_router

health_check()

app = FastAPI(title="Event Entry Console")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(ticket_router)
app.include_router(event_router)
app.include_router(entry_gate_router)
app.include_router(order_router)
app.include_router(social_review_router)
app.include_router(refund_router)
app.include_router(admin_user_router)


def validation_error_response(errors) -> JSONResponse:
    error_details = []
    for error in errors:
        # request errors are prefixed with their location, e.g. ("body", "eventId")
        loc = [part for part in error["loc"] if part not in ("body", "query", "path")]
        field = loc[0] if loc else "general"
        error_details.append({"field": field, "message": error["msg"]})

    return JSONResponse(
        status_code=422,
        content={
            "message": "Validation error",
            "errors": error_details,
        },
    )


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
):
    return validation_error_response(exc.errors())


@app.exception_handler(ValidationError)
async def pydantic_validation_exception_handler(request: Request, exc: ValidationError):
    return validation_error_response(exc.errors())


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return handle_http_exception(exc)


@app.get("/")
async def hello():
    logger.info("hello")
    return {"Hello": "from event entry console"}


@app.get("/health")
def health():
    if not database_is_reachable():
        return JSONResponse(status_code=503, content={"status": "unavailable"})
    return {"status": "ok"}
