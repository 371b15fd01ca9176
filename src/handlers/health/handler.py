"""
Lambda handler for the health check endpoint.
"""

from http import HTTPStatus
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.request import request_log_context
from core.utils.response import ResponseBuilder

from .service import HealthService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """Return 200 when the database answers ``SELECT 1``, 500 otherwise."""
    logger.debug("Received health check", extra=request_log_context(event, context))

    report = HealthService().check()
    status = HTTPStatus.OK if report.healthy else HTTPStatus.INTERNAL_SERVER_ERROR

    return ResponseBuilder.json(status, report.model_dump(exclude_none=True))
