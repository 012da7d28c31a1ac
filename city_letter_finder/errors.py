from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Awaitable, Callable

import httpx
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from city_letter_finder import contracts


logger = logging.getLogger(__name__)

HTTP_ERROR_CODE = 'HTTP_ERROR'


class ErrorKind(Enum):
    """Failure kinds mapped to an error code, status and message template."""

    VALIDATION_ERROR = (
        'VALIDATION_ERROR',
        status.HTTP_400_BAD_REQUEST,
        'Validation failed',
    )
    INVALID_DATA = (
        'WEATHER_DATA_INVALID',
        status.HTTP_400_BAD_REQUEST,
        'Invalid weather data: {}',
    )
    SERVICE_UNAVAILABLE = (
        'WEATHER_SERVICE_UNAVAILABLE',
        status.HTTP_503_SERVICE_UNAVAILABLE,
        'Weather service is unavailable: {}',
    )
    EXTERNAL_SERVICE_ERROR = (
        'EXTERNAL_SERVICE_ERROR',
        status.HTTP_503_SERVICE_UNAVAILABLE,
        'Error from external service: {}',
    )
    DATA_PROCESSING_ERROR = (
        'WEATHER_DATA_PROCESSING_ERROR',
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        'Error processing weather data: {}',
    )
    INTERNAL_SERVER_ERROR = (
        'INTERNAL_SERVER_ERROR',
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        'An unexpected error occurred',
    )

    def __init__(self, code: str, status_code: int, template: str) -> None:
        self.code = code
        self.status_code = status_code
        self.template = template

    def render(self, detail: str = '') -> str:
        return self.template.format(detail)


class WeatherServiceError(Exception):
    """The one typed failure raised by the client and the service.

    The underlying failure, if any, is attached with ``raise ... from``.
    """

    def __init__(self, kind: ErrorKind, detail: str = '') -> None:
        super().__init__(kind.render(detail))
        self.kind = kind
        self.detail = detail

    @property
    def error_code(self) -> str:
        return self.kind.code

    @property
    def status_code(self) -> int:
        return self.kind.status_code


def describe_upstream_failure(exc: Exception) -> str:
    """Summarise an outbound failure without the request query string.

    The upstream URL carries the API key in ``appid``, and httpx puts the
    full URL into the text of its exceptions.
    """
    if isinstance(exc, httpx.HTTPStatusError):
        return 'HTTP {} {} from {}'.format(
            exc.response.status_code,
            exc.response.reason_phrase,
            str(exc.request.url).split('?', 1)[0],
        )
    return f'{type(exc).__name__}: {exc}'


def build_error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    details: str | None = None,
) -> JSONResponse:
    body = contracts.ErrorResponse(
        error_code=error_code,
        message=message,
        details=details,
        timestamp=datetime.now(timezone.utc),
        status=status_code,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode='json', by_alias=True),
    )


async def weather_service_error_handler(
    request: Request, exc: WeatherServiceError
) -> JSONResponse:
    logger.error('Weather service error: %s', exc)
    return build_error_response(
        request, exc.status_code, exc.error_code, str(exc)
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = ', '.join(
        '{}: {}'.format(
            '.'.join(str(part) for part in error['loc']), error['msg']
        )
        for error in exc.errors()
    )
    logger.warning('Validation error on %s: %s', request.url.path, details)
    kind = ErrorKind.VALIDATION_ERROR
    return build_error_response(
        request, kind.status_code, kind.code, kind.render(), details
    )


async def http_status_error_handler(
    request: Request, exc: httpx.HTTPStatusError
) -> JSONResponse:
    logger.error('External service error: %s', describe_upstream_failure(exc))
    kind = ErrorKind.EXTERNAL_SERVICE_ERROR
    return build_error_response(
        request,
        kind.status_code,
        kind.code,
        kind.render(describe_upstream_failure(exc)),
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    logger.warning('HTTP error %s on %s', exc.status_code, request.url.path)
    return build_error_response(
        request, exc.status_code, HTTP_ERROR_CODE, str(exc.detail)
    )


async def unhandled_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    logger.error('Unhandled exception: %s', exc, exc_info=exc)
    kind = ErrorKind.INTERNAL_SERVER_ERROR
    return build_error_response(
        request, kind.status_code, kind.code, kind.render(), str(exc)
    )


async def catch_unhandled_exceptions(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    # runs inside CORSMiddleware, unlike an Exception handler
    try:
        return await call_next(request)
    except Exception as exc:
        return await unhandled_exception_handler(request, exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(
        WeatherServiceError, weather_service_error_handler
    )
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(httpx.HTTPStatusError, http_status_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.middleware('http')(catch_unhandled_exceptions)
