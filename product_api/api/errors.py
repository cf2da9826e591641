from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from product_api.core.exceptions import (
    ProductNotFoundError,
    ProductValidationError,
    UnexpectedFailure,
)


def _field_name(loc) -> str:
    # ("body", "price") -> "price"; ("path", "product_id") -> "product_id"
    parts = [str(p) for p in loc[1:]] or [str(p) for p in loc]
    return ".".join(parts)


async def product_validation_handler(request: Request, exc: ProductValidationError):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=exc.errors)


async def product_not_found_handler(request: Request, exc: ProductNotFoundError):
    return Response(status_code=status.HTTP_404_NOT_FOUND)


async def unexpected_failure_handler(request: Request, exc: UnexpectedFailure):
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": exc.message},
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Кривое тело/параметры -> 400 в той же форме {поле: сообщение}."""
    errors = {}
    for err in exc.errors():
        errors.setdefault(_field_name(err.get("loc", ())), err.get("msg", "invalid value"))
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=errors)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ProductValidationError, product_validation_handler)
    app.add_exception_handler(ProductNotFoundError, product_not_found_handler)
    app.add_exception_handler(UnexpectedFailure, unexpected_failure_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
