from typing import Optional
from pydantic import BaseModel, ConfigDict


class UnauthorizedResponse(BaseModel):
    message: str = "Unauthorized"


class BadRequestResponse(BaseModel):
    error: Optional[str] = None
    message: str


class ValidationErrorResponseDetail(BaseModel):
    field: str
    message: str


class ValidationErrorResponse(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "message": "Validation error",
                "errors": [
                    {
                        "field": "status",
                        "message": "Input should be 'pending', 'approved', 'rejected' or 'not_required'",
                    },
                ],
            }
        },
    )

    message: str
    errors: list[ValidationErrorResponseDetail]


class ForbiddenResponse(BaseModel):
    message: str = "You don't have permissions to perform this action"


class NotFoundResponse(BaseModel):
    error: Optional[str] = None
    message: str = "Not Found"


class InternalServerErrorResponse(BaseModel):
    error: str = "Internal server error"
    message: str
