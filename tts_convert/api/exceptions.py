"""Custom exceptions for the conversion API.

Exception hierarchy with unique error codes:
- ConversionBaseException: Base with error_code, error, message, details, http_status
- BadRequestError (400): Missing fields, empty or oversized content, bad uploads
- NotFoundError (404): Conversion record or artifact missing
- UpstreamError (500): Extraction, synthesis, artifact store, record store failures
"""

from typing import Any


class ConversionBaseException(Exception):
    """
    Base exception for all conversion API errors.

    All exceptions have:
    - error_code: Unique string identifier (e.g., "CONV_E101")
    - error: Short summary rendered as the response "error" field
    - message: Human-readable error message
    - details: Additional context as a dictionary
    - http_status: HTTP status code for the response
    """

    error_code: str = "CONV_E000"
    error: str = "Internal server error"
    http_status: int = 500

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        error_code: str | None = None,
        http_status: int | None = None,
    ) -> None:
        self.message = message
        self.details = details or {}
        if error_code is not None:
            self.error_code = error_code
        if http_status is not None:
            self.http_status = http_status
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        body: dict[str, Any] = {
            "error": self.error,
            "message": self.message,
            "code": self.error_code,
        }
        if self.details:
            body["details"] = self.details
        return body

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.error_code}, message={self.message!r})"


# =============================================================================
# 400 Bad Request
# =============================================================================


class BadRequestError(ConversionBaseException):
    """Raised when request input is missing or invalid (400)."""

    error_code = "CONV_E100"
    error = "Invalid request"
    http_status = 400

    def __init__(
        self,
        message: str = "Invalid request",
        details: dict[str, Any] | None = None,
        field: str | None = None,
    ) -> None:
        if field:
            details = details or {}
            details["field"] = field
        super().__init__(message=message, details=details)


class MissingFieldError(BadRequestError):
    """Raised when a required request field is absent (400)."""

    error_code = "CONV_E101"

    def __init__(self, field: str, message: str | None = None) -> None:
        super().__init__(message=message or f"{field} is required", field=field)


class NoContentError(BadRequestError):
    """Raised when neither a file nor inline text was provided (400)."""

    error_code = "CONV_E102"

    def __init__(self) -> None:
        super().__init__(message="No text or file provided")


class EmptyContentError(BadRequestError):
    """Raised when the text to convert is empty or whitespace only (400)."""

    error_code = "CONV_E103"

    def __init__(self) -> None:
        super().__init__(message="Empty text content")


class ContentTooLargeError(BadRequestError):
    """Raised when the text exceeds the maximum length (400)."""

    error_code = "CONV_E104"

    def __init__(self, max_length: int, actual_length: int) -> None:
        super().__init__(
            message=f"Text too long. Maximum {max_length} characters allowed.",
            details={"max_length": max_length, "actual_length": actual_length},
        )


class UnsupportedMediaTypeError(BadRequestError):
    """Raised when an upload is neither PDF nor plain text (400)."""

    error_code = "CONV_E105"

    def __init__(self, media_type: str | None, supported: list[str] | None = None) -> None:
        details: dict[str, Any] = {"media_type": media_type}
        if supported:
            details["supported_media_types"] = supported
        super().__init__(message="Only PDF and TXT files are allowed", details=details)


class FileTooLargeError(BadRequestError):
    """Raised when an upload exceeds the size limit (400)."""

    error_code = "CONV_E106"

    def __init__(self, max_size_mb: int) -> None:
        super().__init__(
            message=f"File too large. Maximum size is {max_size_mb}MB.",
            details={"max_size_mb": max_size_mb},
        )


class InvalidUserIdError(BadRequestError):
    """Raised when a user id cannot be used as a path segment (400)."""

    error_code = "CONV_E107"

    def __init__(self, user_id: str) -> None:
        super().__init__(
            message="User ID must not contain '/'",
            details={"user_id": user_id},
            field="userId",
        )


# =============================================================================
# 404 Not Found
# =============================================================================


class NotFoundError(ConversionBaseException):
    """Raised when a requested resource is not found (404)."""

    error_code = "CONV_E300"
    error = "Not found"
    http_status = 404

    def __init__(
        self,
        resource: str,
        identifier: str,
        message: str | None = None,
    ) -> None:
        super().__init__(
            message=message or f"{resource} not found: {identifier}",
            details={"resource": resource, "identifier": identifier},
        )


class ConversionNotFoundError(NotFoundError):
    """Raised when a conversion does not exist for the user (404)."""

    error_code = "CONV_E301"
    error = "Conversion not found"

    def __init__(self, user_id: str, conversion_id: str) -> None:
        super().__init__(resource="Conversion", identifier=conversion_id)
        self.details["user_id"] = user_id


class RecordNotFoundError(NotFoundError):
    """Raised by a record store when deleting an absent record (404)."""

    error_code = "CONV_E302"

    def __init__(self, user_id: str, conversion_id: str) -> None:
        super().__init__(
            resource="Record",
            identifier=f"users/{user_id}/conversions/{conversion_id}",
        )


class ArtifactNotFoundError(NotFoundError):
    """Raised by an artifact store when deleting an absent artifact (404)."""

    error_code = "CONV_E303"

    def __init__(self, name: str) -> None:
        super().__init__(resource="Artifact", identifier=name)


# =============================================================================
# 500 Upstream failures
# =============================================================================


class UpstreamError(ConversionBaseException):
    """Raised when an external collaborator fails (500)."""

    error_code = "CONV_E500"
    error = "Conversion failed"
    http_status = 500

    def __init__(
        self,
        message: str = "Upstream service failed",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, details=details)


class ExtractionFailedError(UpstreamError):
    """Raised when text cannot be extracted from an upload (500)."""

    error_code = "CONV_E501"

    def __init__(self, media_type: str, reason: str) -> None:
        super().__init__(
            message=f"Failed to extract text: {reason}",
            details={"media_type": media_type},
        )


class SynthesisFailedError(UpstreamError):
    """Raised when the speech synthesis call fails (500)."""

    error_code = "CONV_E502"

    def __init__(self, voice_name: str, reason: str) -> None:
        super().__init__(
            message=f"Speech synthesis failed: {reason}",
            details={"voice_name": voice_name},
        )


class ArtifactStoreError(UpstreamError):
    """Raised when the blob store rejects an upload (500)."""

    error_code = "CONV_E510"

    def __init__(self, name: str, reason: str, operation: str = "store") -> None:
        super().__init__(
            message=f"Artifact {operation} failed: {reason}",
            details={"artifact": name, "operation": operation},
        )


class DeleteFailedError(ArtifactStoreError):
    """Raised when the blob store fails to delete an artifact (500)."""

    error_code = "CONV_E511"

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(name=name, reason=reason, operation="delete")


class RecordStoreError(UpstreamError):
    """Raised when the document database call fails (500)."""

    error_code = "CONV_E520"

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            message=f"Record {operation} failed: {reason}",
            details={"operation": operation},
        )
