"""
Lambda handler responsible for describing a single image.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.request import base_url, get_path_parameter, request_log_context
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import GetImageRequest, GetImageResponse
from .service import GetService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle ``GET /api/images/{filename}``.

    Returns the image description (names, size, URLs, upload time) rather
    than the image itself.

    Args:
        event: API Gateway event payload.
        context: AWS Lambda runtime context.

    Returns:
        API Gateway-compatible response dictionary.
    """
    logger.info("Received image details request", extra=request_log_context(event, context))

    try:
        request = validate_request(
            GetImageRequest,
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

    service = GetService()
    image = service.get_image(request.filename, base_url=base_url(event))

    return ResponseBuilder.ok(GetImageResponse(data=image).model_dump(by_alias=True))
