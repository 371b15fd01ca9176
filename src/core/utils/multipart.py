"""Streaming multipart/form-data parsing for upload requests.

``python-multipart`` does the wire parsing; this module collects file parts
and stops as soon as one grows past the size limit, so an oversized upload
is never fully buffered and never reaches storage.
"""

from dataclasses import dataclass, field

from aws_lambda_powertools import Logger
from pydantic import BaseModel, Field
from python_multipart.exceptions import MultipartParseError
from python_multipart.multipart import MultipartParser, parse_options_header

from core.models.errors import FileSizeError, InvalidFileError
from core.utils.constants import MAX_FILE_SIZE

logger = Logger(UTC=True)

MULTIPART_CONTENT_TYPE = b"multipart/form-data"
CHUNK_SIZE = 64 * 1024


class UploadedFile(BaseModel):
    """A file part taken from a multipart body."""

    field_name: str = Field(..., description="Form field name")
    filename: str = Field(..., description="Client-supplied file name, unmodified")
    content_type: str | None = Field(None, description="Declared part Content-Type")
    data: bytes = Field(..., description="Part payload")

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class _PartState:
    headers: list[tuple[bytes, bytes]] = field(default_factory=list)
    header_field: bytes = b""
    header_value: bytes = b""
    field_name: str = ""
    filename: str | None = None
    content_type: str | None = None
    data: bytearray = field(default_factory=bytearray)


class _FileCollector:
    """Callback target for ``MultipartParser``."""

    def __init__(self, max_file_size: int) -> None:
        self.max_file_size = max_file_size
        self.files: list[UploadedFile] = []
        self._part = _PartState()

    def callbacks(self) -> dict:
        return {
            "on_part_begin": self.on_part_begin,
            "on_part_data": self.on_part_data,
            "on_part_end": self.on_part_end,
            "on_header_field": self.on_header_field,
            "on_header_value": self.on_header_value,
            "on_header_end": self.on_header_end,
            "on_headers_finished": self.on_headers_finished,
        }

    def on_part_begin(self) -> None:
        self._part = _PartState()

    def on_header_field(self, data: bytes, start: int, end: int) -> None:
        self._part.header_field += data[start:end]

    def on_header_value(self, data: bytes, start: int, end: int) -> None:
        self._part.header_value += data[start:end]

    def on_header_end(self) -> None:
        part = self._part
        part.headers.append((part.header_field.lower(), part.header_value))
        part.header_field = b""
        part.header_value = b""

    def on_headers_finished(self) -> None:
        part = self._part
        headers = dict(part.headers)

        _, options = parse_options_header(headers.get(b"content-disposition", b""))
        part.field_name = options.get(b"name", b"").decode("utf-8", errors="replace")

        if b"filename" in options:
            part.filename = options[b"filename"].decode("utf-8", errors="replace")

        if b"content-type" in headers:
            part.content_type = headers[b"content-type"].decode("latin-1").strip()

    def on_part_data(self, data: bytes, start: int, end: int) -> None:
        part = self._part

        # Plain form fields are ignored.
        if part.filename is None:
            return

        part.data.extend(data[start:end])

        if len(part.data) > self.max_file_size:
            logger.warning(
                "Multipart file part exceeded size limit",
                extra={
                    "field_name": part.field_name,
                    "upload_name": part.filename,
                    "limit": self.max_file_size,
                },
            )
            raise FileSizeError(
                details={"field": part.field_name, "limit": self.max_file_size},
            )

    def on_part_end(self) -> None:
        part = self._part
        if part.filename is None:
            return

        self.files.append(
            UploadedFile(
                field_name=part.field_name,
                filename=part.filename,
                content_type=part.content_type,
                data=bytes(part.data),
            )
        )


def parse_multipart(
    body: bytes,
    content_type: str | None,
    *,
    max_file_size: int = MAX_FILE_SIZE,
) -> list[UploadedFile]:
    """Return every file part of a multipart/form-data body.

    Bodies of another content type yield no files.

    Raises:
        FileSizeError: If a file part exceeds ``max_file_size`` bytes
        InvalidFileError: If the body is not valid multipart data
    """
    if not content_type:
        return []

    mime_type, params = parse_options_header(content_type)
    boundary = params.get(b"boundary")

    if mime_type != MULTIPART_CONTENT_TYPE or not boundary:
        logger.info(
            "Request body is not multipart form data",
            extra={"content_type": content_type},
        )
        return []

    collector = _FileCollector(max_file_size)
    parser = MultipartParser(boundary, collector.callbacks())

    try:
        for offset in range(0, len(body), CHUNK_SIZE):
            parser.write(body[offset : offset + CHUNK_SIZE])
        parser.finalize()
    except MultipartParseError as exc:
        logger.warning("Malformed multipart body", extra={"error": str(exc)})
        raise InvalidFileError(details={"reason": str(exc)}) from exc

    return collector.files


def find_upload(files: list[UploadedFile], field_name: str) -> UploadedFile | None:
    """First file part sent under ``field_name``."""
    return next((f for f in files if f.field_name == field_name), None)
