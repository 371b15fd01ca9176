"""
Common decorators and helpers for API Gateway Lambda handlers.
"""

from __future__ import annotations

import traceback
from collections.abc import Callable
from functools import wraps
from http import HTTPStatus
from typing import Any

from aws_lambda_powertools import Logger

from core.models.errors import (
    FileSizeError,
    ImageServiceError,
    NotFoundError,
    ValidationError,
)
from core.utils.constants import ERROR_CODE_INTERNAL_ERROR, MSG_FILE_TOO_LARGE
from core.utils.response import ResponseBuilder

logger = Logger(service="api-gateway-handler", UTC=True)

JsonDict = dict[str, Any]


def _log_error(
    message: str,
    *,
    handler_name: str,
    request_id: str | None,
    exc: Exception,
    level: str = "warning",
) -> None:
    """
    Log error with consistent structure and full context.

    Args:
        message: Log message
        handler_name: Name of the handler function
        request_id: AWS request ID
        exc: Exception that was raised
        level: Log level ('warning' or 'exception')
    """
    log_extra = {
        "handler": handler_name,
        "request_id": request_id,
        "error": str(exc),
        "error_type": type(exc).__name__,
    }

    if level == "exception":
        logger.exception(message, extra=log_extra)
    else:
        log_extra["traceback"] = traceback.format_exc()
        logger.warning(message, extra=log_extra)


def api_gateway_handler(
    func: Callable[..., JsonDict],
) -> Callable[..., JsonDict]:
    """
    Decorator for API Gateway Lambda handlers.

    Provides:
    - Automatic CORS preflight (OPTIONS) handling
    - Translation of domain errors into HTTP responses
    - Request ID tracking and structured logging
    - Full traceback logging for monitoring

    Oversized uploads surface as ``FileSizeError`` from the multipart parser
    and are answered here with the fixed 400 "File too large" message.
    Anything unrecognized becomes a 500 that echoes the error message.

    Example:
        @api_gateway_handler
        def handler(event, context):
            return ResponseBuilder.ok({"success": True})
    """

    @wraps(func)
    def wrapper(
        event: Any,
        context: Any,
        *,
        cors_origin: str | None = None,
    ) -> JsonDict:
        if event.get("httpMethod") == "OPTIONS":
            return ResponseBuilder.no_content(cors_origin=cors_origin)

        request_id = getattr(context, "aws_request_id", None)

        try:
            return func(event, context)

        except FileSizeError as exc:
            _log_error(
                "Upload exceeded size limit",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
            )
            return ResponseBuilder.bad_request(
                MSG_FILE_TOO_LARGE,
                error=exc.error_code,
                request_id=request_id,
                cors_origin=cors_origin,
            )

        except ValidationError as exc:
            _log_error(
                "Validation error in handler",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
            )
            return ResponseBuilder.bad_request(
                exc.message,
                error=exc.error_code,
                details=exc.details,
                request_id=request_id,
                cors_origin=cors_origin,
            )

        except NotFoundError as exc:
            _log_error(
                "Resource not found",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
            )
            return ResponseBuilder.not_found(
                exc.message,
                error=exc.error_code,
                details=exc.details,
                request_id=request_id,
                cors_origin=cors_origin,
            )

        # Storage, database and metadata failures
        except ImageServiceError as exc:
            _log_error(
                "Service error in handler",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
                level="exception",
            )
            return ResponseBuilder.internal_error(
                exc.message,
                error=exc.error_code,
                details=exc.details,
                request_id=request_id,
                cors_origin=cors_origin,
            )

        except Exception as exc:
            _log_error(
                "Unexpected error in handler",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
                level="exception",
            )
            return ResponseBuilder.internal_error(
                str(exc) or HTTPStatus.INTERNAL_SERVER_ERROR.phrase,
                error=ERROR_CODE_INTERNAL_ERROR,
                request_id=request_id,
                cors_origin=cors_origin,
            )

    return wrapper
