"""
Lambda handler responsible for listing every stored image.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.image import ListImagesResponse
from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.request import base_url, request_log_context
from core.utils.response import ResponseBuilder

from .service import ListService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle requests to list images.

    Results are ordered by upload time, newest first. There is no pagination.

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    logger.info("Received image list request", extra=request_log_context(event, context))

    service = ListService()
    images = service.list_images(base_url=base_url(event))

    response = ListImagesResponse(count=len(images), images=images)
    return ResponseBuilder.ok(response.model_dump(by_alias=True))
