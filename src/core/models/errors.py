"""Custom exception classes for the image service."""

from typing import Any

from core.utils.constants import (
    ERROR_CODE_CONTENT_UNAVAILABLE,
    ERROR_CODE_DATABASE,
    ERROR_CODE_FILE_SIZE_EXCEEDED,
    ERROR_CODE_INVALID_FILE,
    ERROR_CODE_INVALID_SVG,
    ERROR_CODE_RESOURCE_NOT_FOUND,
    ERROR_CODE_STORAGE,
    ERROR_CODE_VALIDATION_FAILED,
    MSG_CONTENT_UNAVAILABLE,
    MSG_FILE_TOO_LARGE,
    MSG_INVALID_SVG,
    MSG_NO_FILE,
)


class ImageServiceError(Exception):
    """
    Base exception for all image service errors.

    All custom errors must inherit from this class.
    Callers must explicitly provide a message and error code.
    Optional contextual information can be supplied via `details`.
    """

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


class ValidationError(ImageServiceError):
    """Raised when request validation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_VALIDATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class InvalidFileError(ValidationError):
    """Raised when no acceptable SVG file part was attached."""

    def __init__(
        self,
        *,
        message: str = MSG_NO_FILE,
        error_code: str = ERROR_CODE_INVALID_FILE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class InvalidSVGError(ValidationError):
    """Raised when an upload does not look like SVG markup."""

    def __init__(
        self,
        *,
        message: str = MSG_INVALID_SVG,
        error_code: str = ERROR_CODE_INVALID_SVG,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class FileSizeError(ValidationError):
    """Raised when file size exceeds the allowed limit."""

    def __init__(
        self,
        *,
        message: str = MSG_FILE_TOO_LARGE,
        error_code: str = ERROR_CODE_FILE_SIZE_EXCEEDED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class NotFoundError(ImageServiceError):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_RESOURCE_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class ContentUnavailableError(NotFoundError):
    """Raised when a metadata row exists but carries no image content."""

    def __init__(
        self,
        *,
        message: str = MSG_CONTENT_UNAVAILABLE,
        error_code: str = ERROR_CODE_CONTENT_UNAVAILABLE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class StorageError(ImageServiceError):
    """Raised when an image storage operation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_STORAGE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class DatabaseError(StorageError):
    """Raised when a relational database operation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_DATABASE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )
