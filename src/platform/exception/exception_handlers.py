from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.responses import Response

from src.platform.exception.exceptions import CustomBaseError, InternalError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.platform.types.operation_result import OperationResult

# Type alias for exception handlers (compatible with Starlette's expected signature)
ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]


async def custom_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, CustomBaseError) else InternalError()
    return JSONResponse(
        status_code=error.status_code, content=OperationResult.from_error(error).to_dict()
    )


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    message = '; '.join(
        f'{".".join(str(loc) for loc in err.get("loc", ()))}: {err.get("msg", "")}'
        for err in errors
    )
    result = OperationResult.from_error(ValidationError(message or 'Invalid request'))
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=result.to_dict())


async def general_500_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    Logger.base.error(f'[UNHANDLED] {request.method} {request.url.path}: {type(exc).__name__}')
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=OperationResult.from_error(exc).to_dict(),
    )


# Exception handler mapping
EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    CustomBaseError: custom_error_handler,
    RequestValidationError: validation_error_handler,
    Exception: general_500_exception_handler,  # Catch-all for unhandled exceptions
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
