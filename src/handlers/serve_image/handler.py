"""
Lambda handler responsible for serving raw SVG content.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.utils.constants import CACHE_CONTROL_IMMUTABLE, METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.request import get_path_parameter, request_log_context
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import ServeImageRequest
from .service import ServeService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle ``GET /images/{filename}``.

    The body is base64-encoded; API Gateway turns it back into the SVG bytes
    because ``image/svg+xml`` is a registered binary media type. Responses
    are cacheable for a year.

    ``/images/list`` is its own route and never reaches this handler.
    """
    logger.info("Received image content request", extra=request_log_context(event, context))

    try:
        request = validate_request(
            ServeImageRequest,
            {"filename": get_path_parameter(event, "filename")},
        )
    except ValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": exc.errors()},
        )
        return ResponseBuilder.bad_request(
            message="Invalid request params",
            details={"errors": sanitize_validation_errors(exc.errors())},
        )

    service = ServeService()
    image = service.load_image(request.filename)

    return ResponseBuilder.binary_response(
        image.content,
        content_type=image.mime_type,
        headers={"Cache-Control": CACHE_CONTROL_IMMUTABLE},
    )
