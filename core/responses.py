from abc import ABCMeta, abstractmethod
from typing import Any, Optional, Union
from fastapi import HTTPException
from fastapi.responses import JSONResponse, Response


class HttpResponseAbstract(metaclass=ABCMeta):
    @abstractmethod
    def response(self) -> Union[JSONResponse, Response, None]:
        pass


def _error_body(
    message: Optional[str], error: Optional[str], data: Optional[dict]
) -> dict:
    """
    build error json, ticket context (data) is merged in at the top level:
    json:{
        'error': f'{error}',
        'message': f'{message}',
        ...data
    }
    """
    body: dict = {}
    if error is not None:
        body["error"] = error
    body["message"] = message
    if data:
        body.update(data)
    return body


class Ok(HttpResponseAbstract):
    def __init__(self, data: Optional[Any]) -> None:
        if data is not None:
            self.data = data
        else:
            self.data = ""

    def response(self) -> JSONResponse:
        """
        parse class to JSONReponse
        """
        return JSONResponse(content=self.data, status_code=200)


class Created(HttpResponseAbstract):
    def __init__(self, data: Optional[Any]) -> None:
        if data is not None:
            self.data = data
        else:
            self.data = ""

    def response(self) -> JSONResponse:
        """
        parse class to JSONReponse
        """
        return JSONResponse(content=self.data, status_code=201)


class Unauthorized(HttpResponseAbstract):
    def __init__(self, message: str = "Unauthorized") -> None:
        """
        default json response:
        json:{
            'message': 'Unauthorized'
        }
        status_code: 401
        """
        self.message = message

    def response(self) -> JSONResponse:
        return JSONResponse(content={"message": f"{self.message}"}, status_code=401)


class BadRequest(HttpResponseAbstract):
    def __init__(
        self,
        message: Optional[str] = None,
        error: Optional[str] = None,
        data: Optional[dict] = None,
    ) -> None:
        """
        message: bad request message, for default json response
        error: short error title, e.g. 'Ticket already used'
        data: ticket context merged into the body so the operator still sees it
        status_code: 400

        example:
        BadRequest(message="...", error="Invalid gate", data={"ticket": {...}})
        """
        self.message = message
        self.error = error
        self.data = data

    def response(self) -> JSONResponse:
        """
        parse class to JSONReponse
        """
        return JSONResponse(
            content=_error_body(self.message, self.error, self.data), status_code=400
        )


class Forbidden(HttpResponseAbstract):
    def __init__(self, message: Optional[str] = None) -> None:
        """
        default json response:
        json:{
            'message': 'You don\'t have permissions to perform this action'
        }
        status_code: 403
        """
        self.message = message or "You don't have permissions to perform this action"

    def response(self) -> JSONResponse:
        """
        parse class to JSONReponse
        """
        return JSONResponse(content={"message": self.message}, status_code=403)


class NotFound(HttpResponseAbstract):
    def __init__(
        self, message: str = "Not Found", error: Optional[str] = None
    ) -> None:
        """
        default json response:
        json:{
            'message': 'Not Found'
        }
        status_code: 404
        """
        self.message = message
        self.error = error

    def response(self) -> JSONResponse:
        """
        parse class to JSONReponse
        """
        return JSONResponse(
            content=_error_body(self.message, self.error, None), status_code=404
        )


class InternalServerError(HttpResponseAbstract):
    def __init__(self, error: Optional[str] = None) -> None:
        """
        error: error string for defaut json response
        json:{
            'error': 'Internal server error',
            'message': '{error}'
        }
        status_code: 500
        """
        self.error = error

    def response(self) -> JSONResponse:
        """
        parse class to JSONReponse
        """
        return JSONResponse(
            content=_error_body(
                self.error or "An unexpected error occurred",
                "Internal server error",
                None,
            ),
            status_code=500,
        )


def common_response(res: HttpResponseAbstract):
    return res.response()


def handle_http_exception(
    e: HTTPException,
) -> Union[None, JSONResponse, Response]:
    if e.status_code == 400:
        return common_response(BadRequest(message=e.detail))
    elif e.status_code == 401:
        return common_response(Unauthorized(message=e.detail))
    elif e.status_code == 403:
        return common_response(Forbidden(message=e.detail))
    elif e.status_code == 404:
        return common_response(NotFound(message=e.detail))
    elif e.status_code == 422:
        return common_response(BadRequest(message=e.detail))
    else:
        return common_response(InternalServerError(error=f"{e.detail}"))
