"""Global constants used throughout the application.

This module centralizes all magic numbers, string literals, and configuration
values that are used across multiple modules. Using constants prevents hardcoding
values and makes it easy to change them globally.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================


# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_INVALID_FILE = "INVALID_FILE"
ERROR_CODE_INVALID_SVG = "INVALID_SVG"
ERROR_CODE_FILE_SIZE_EXCEEDED = "FILE_SIZE_EXCEEDED"

# Not Found Errors
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"
ERROR_CODE_IMAGE_NOT_FOUND = "IMAGE_NOT_FOUND"
ERROR_CODE_CONTENT_UNAVAILABLE = "CONTENT_UNAVAILABLE"

# Storage Errors
ERROR_CODE_STORAGE = "STORAGE_ERROR"
ERROR_CODE_IMAGE_UPLOAD_FAILED = "IMAGE_UPLOAD_FAILED"
ERROR_CODE_IMAGE_READ_FAILED = "IMAGE_READ_FAILED"
ERROR_CODE_IMAGE_DELETE_FAILED = "IMAGE_DELETE_FAILED"
ERROR_CODE_IMAGE_LIST_FAILED = "IMAGE_LIST_FAILED"

# Metadata / Database Errors
ERROR_CODE_DATABASE = "DATABASE_ERROR"
ERROR_CODE_METADATA_UPSERT_FAILED = "METADATA_UPSERT_FAILED"
ERROR_CODE_METADATA_FETCH_FAILED = "METADATA_FETCH_FAILED"
ERROR_CODE_METADATA_DELETE_FAILED = "METADATA_DELETE_FAILED"
ERROR_CODE_METADATA_LIST_FAILED = "METADATA_LIST_FAILED"

# Internal / Unexpected
ERROR_CODE_INTERNAL_ERROR = "INTERNAL_ERROR"


# ============================================================================
# File Upload Constraints
# ============================================================================

MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB in bytes

UPLOAD_FIELD_NAME = "image"

SVG_MIME_TYPE: Final[str] = "image/svg+xml"
SVG_EXTENSION: Final[str] = ".svg"

SVG_OPEN_TAG: Final[str] = "<svg"
SVG_CLOSE_TAG: Final[str] = "</svg>"


# ============================================================================
# Database
# ============================================================================

# Filenames bound per IN (...) lookup; PostgreSQL caps a statement at 65535 parameters.
METADATA_LOOKUP_BATCH_SIZE = 500


# ============================================================================
# User-facing Messages
# ============================================================================

MSG_FILE_TOO_LARGE = "File too large. Maximum size is 5MB."
MSG_NO_FILE = "No file uploaded or invalid file type"
MSG_ONLY_SVG = "Only SVG files are allowed!"
MSG_INVALID_SVG = "Invalid SVG file format"
MSG_UPLOAD_OK = "SVG image uploaded successfully"
MSG_UPLOAD_FAILED = "Error uploading file"
MSG_UPLOAD_DB_FAILED = "Database error while saving image"
MSG_IMAGE_NOT_FOUND = "Image not found"
MSG_CONTENT_UNAVAILABLE = "Image content not available. Please re-upload the image."
MSG_DELETE_OK = "Image deleted successfully"
MSG_DELETE_FAILED = "Error deleting image"
MSG_LIST_FAILED = "Error fetching image list"
MSG_FETCH_FAILED = "Error fetching image"
MSG_SERVE_FAILED = "Error serving image"


# ============================================================================
# Serving
# ============================================================================

IMAGE_ROUTE_PREFIX = "/images"
CACHE_CONTROL_IMMUTABLE = "public, max-age=31536000"  # 1 year

SERVICE_NAME = "SVG Images API Service"
SERVICE_VERSION = "1.0.0"
METRICS_NAMESPACE = "SvgImageService"


# ============================================================================
# Storage Backends
# ============================================================================

STORAGE_BACKEND_INLINE = "inline"
STORAGE_BACKEND_FILESYSTEM = "filesystem"
DEFAULT_STORAGE_BACKEND = STORAGE_BACKEND_INLINE
DEFAULT_UPLOAD_DIR = "uploads"

IMAGES_TABLE_NAME = "images"


# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "GET,POST,PUT,DELETE,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization"
EXPOSE_HEADERS = "Content-Type,Content-Length,Cache-Control"
DEFAULT_CONTENT_TYPE = "application/json"
DEFAULT_SCHEME = "https"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_DATABASE_URL = "DATABASE_URL"
ENV_ENVIRONMENT = "ENVIRONMENT"
ENV_STORAGE_BACKEND = "STORAGE_BACKEND"
ENV_UPLOAD_DIR = "UPLOAD_DIR"
ENV_HOST = "HOST"
ENV_PORT = "PORT"

DEFAULT_HOST = "localhost"
DEFAULT_PORT = "3000"
PRODUCTION_ENVIRONMENT = "production"
