"""
Lambda handler dumping the images table.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.request import request_log_context
from core.utils.response import ResponseBuilder

from .models import DebugImagesResponse
from .service import DebugService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle ``GET /debug/images``.

    Lists filename, original name, size, inline content length and upload
    time of every row. Database failures become a 500 through
    ``api_gateway_handler``.
    """
    logger.info("Received debug images request", extra=request_log_context(event, context))

    rows = DebugService().dump_images()

    response = DebugImagesResponse(count=len(rows), images=rows)
    return ResponseBuilder.ok(response.model_dump())
