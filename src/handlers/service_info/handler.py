"""
Lambda handler describing the service.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.infrastructure.factory import storage_backend_name
from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.request import request_log_context
from core.utils.response import ResponseBuilder

from .models import ServiceInfoResponse

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """Return the service name, version, storage backend and routes."""
    logger.debug("Received service info request", extra=request_log_context(event, context))

    info = ServiceInfoResponse(storage=storage_backend_name())
    return ResponseBuilder.ok(info.model_dump())
