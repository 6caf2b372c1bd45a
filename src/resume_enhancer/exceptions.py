"""Application error hierarchy.

Services raise these; ``resume_enhancer.main`` renders them as
``{"message": ...}`` JSON with the carried status code.
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class UnsupportedTypeError(ValidationError):
    default_message = "Invalid file type. Only PDF and DOCX files are allowed."


class PayloadTooLargeError(ValidationError):
    default_message = "File size exceeds the upload limit."


class ExtractionError(ValidationError):
    default_message = "Failed to parse the uploaded file"


class NoReadableTextError(ValidationError):
    default_message = (
        "Could not extract text from the file. "
        "Please ensure the file contains readable text."
    )


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class ConfigurationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Configuration error"


class RateLimitedError(AppError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_message = "Too many attempts. Please try again later."

    def __init__(self, message: str | None = None, retry_after: int | None = None):
        super().__init__(message)
        self.retry_after = retry_after


class ProviderError(AppError):
    """An LLM provider call failed (non-2xx response or transport failure)."""

    default_message = "LLM provider request failed"

    def __init__(self, provider: str, status: int | None, body: str):
        self.provider = provider
        self.status = status
        self.body = body
        super().__init__(f"{provider} API error: {body}")


class ProviderResponseError(ProviderError):
    """A 2xx provider reply did not have the expected shape."""


class UnsupportedProviderError(AppError):
    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"Unsupported provider: {provider}")


class StorageError(AppError):
    default_message = "Object storage request failed"


class VaultError(AppError):
    default_message = "Failed to process API key"


class InvalidFormatError(VaultError):
    default_message = "Invalid encrypted data format"


class DecryptionFailedError(VaultError):
    default_message = "Failed to decrypt API key"
