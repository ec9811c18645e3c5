# shopcart/api/responses.py
from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from shopcart.domain.errors import ShopError, StoreFailure
from shopcart.domain.schemas import ApiError, ApiResponse
from shopcart.utils.logging import get_logger

logger = get_logger(__name__)


def success(status_code: int, message: str, data: Any = None) -> JSONResponse:
    body = ApiResponse[Any](status=status_code, message=message, data=data)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def failure(status_code: int, message: str, error: Any = None) -> JSONResponse:
    body = ApiError(status=status_code, message=message, error=error)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


async def shop_error_handler(request: Request, exc: ShopError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request_failed", method=request.method, path=request.url.path, message=exc.message, error=exc.detail)
    return failure(exc.status_code, exc.message, exc.detail)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return failure(400, "Invalid request body", jsonable_encoder(exc.errors()))


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("store_failure", method=request.method, path=request.url.path)
    return failure(StoreFailure.status_code, StoreFailure.message)
