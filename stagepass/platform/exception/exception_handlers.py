"""
HTTP rendering of StagePass errors.

Every failure leaves the API as `{"detail": ...}`: the error message for
CustomBaseError, a list of field problems for request validation, and a fixed
text for storage and unexpected failures so driver messages never leak.
"""

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from stagepass.platform.exception.exceptions import CustomBaseError, StorageError
from stagepass.platform.logging.loguru_io import Logger


def _detail_response(status_code: int, detail: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={'detail': jsonable_encoder(detail)})


def _field_problems(errors: Any) -> list[dict[str, Any]]:
    # pydantic's `ctx` may hold the raised exception object, which is not JSON
    return [
        {'loc': list(error['loc']), 'msg': error['msg'], 'type': error['type']}
        for error in errors
    ]


async def stagepass_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, CustomBaseError):
        return await unexpected_error_handler(request, exc)
    return _detail_response(exc.status_code, exc.message)


async def request_validation_handler(request: Request, exc: Exception) -> JSONResponse:
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    return _detail_response(status.HTTP_400_BAD_REQUEST, _field_problems(errors))


async def storage_error_handler(request: Request, exc: Exception) -> JSONResponse:
    Logger.base.error(f'[STORAGE] {request.method} {request.url.path} failed: {exc}')
    error = StorageError()
    return _detail_response(error.status_code, error.message)


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    Logger.base.error(f'[UNHANDLED] {request.method} {request.url.path}: {type(exc).__name__}')
    return _detail_response(status.HTTP_500_INTERNAL_SERVER_ERROR, 'Internal server error')


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CustomBaseError, stagepass_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
