"""
Lambda handler responsible for deleting an image.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.request import get_path_parameter, request_log_context
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import DeleteImageRequest, DeleteImageResponse
from .service import DeleteService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle image deletion requests.

    This function:
    - Extracts the filename from API Gateway path parameters
    - Validates the incoming request
    - Delegates deletion to the service layer

    Not-found and storage errors are turned into responses by
    ``api_gateway_handler``.

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    logger.info("Received image delete request", extra=request_log_context(event, context))

    try:
        request = validate_request(
            DeleteImageRequest,
            {"filename": get_path_parameter(event, "filename")},
        )
    except ValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": exc.errors()},
        )
        return ResponseBuilder.bad_request(
            message="Invalid request payload",
            details={"errors": sanitize_validation_errors(exc.errors())},
        )

    service = DeleteService()
    service.delete_image(request.filename)

    metrics.add_metric(name="ImagesDeleted", unit=MetricUnit.Count, value=1)

    return ResponseBuilder.ok(DeleteImageResponse().model_dump())
