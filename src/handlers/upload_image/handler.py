"""
Lambda handler responsible for SVG upload and metadata creation.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.utils.constants import METRICS_NAMESPACE, UPLOAD_FIELD_NAME
from core.utils.decorators import api_gateway_handler
from core.utils.multipart import find_upload, parse_multipart
from core.utils.request import base_url, get_body_bytes, get_header, request_log_context
from core.utils.response import ResponseBuilder

from .models import ImageUploadResponse
from .service import UploadService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle SVG upload requests.

    Expected API Gateway event structure:
    {
        "headers": {"Content-Type": "multipart/form-data; boundary=..."},
        "body": "...",                # base64 when isBase64Encoded is true
        "isBase64Encoded": true
    }

    The file travels in the ``image`` form field. Size limit violations are
    raised by the parser and answered by ``api_gateway_handler``.

    Args:
        event: API Gateway Lambda proxy event containing the multipart body
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response describing the stored image
    """
    logger.info("Received image upload request", extra=request_log_context(event, context))

    files = parse_multipart(get_body_bytes(event), get_header(event, "Content-Type"))
    upload = find_upload(files, UPLOAD_FIELD_NAME)

    service = UploadService()
    data = service.upload_image(upload=upload, base_url=base_url(event))

    metrics.add_metric(name="ImagesUploaded", unit=MetricUnit.Count, value=1)

    response = ImageUploadResponse(data=data)
    return ResponseBuilder.ok(response.model_dump(by_alias=True))
