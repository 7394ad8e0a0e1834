"""Domain errors raised by the catalog services.

Every error that can reach a client derives from ``CatalogError`` and knows
its HTTP status and response payload, so the application registers a single
exception handler for the whole family.
"""


class CatalogError(Exception):
    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message

    def to_payload(self) -> dict:
        return {"success": False, "message": self.message}


class ValidationError(CatalogError):
    """A product record violates a schema invariant."""

    status_code = 400
    message = "Validation Error"

    def __init__(self, errors: list[str], message: str | None = None):
        super().__init__(message)
        self.errors = list(errors)

    def __str__(self) -> str:
        return f"{self.message}: {'; '.join(self.errors)}"

    def to_payload(self) -> dict:
        payload = super().to_payload()
        payload["errors"] = self.errors
        return payload


class NotFoundError(CatalogError):
    status_code = 404
    message = "Product not found"


class UploadError(CatalogError):
    """The media store rejected or failed an upload or deletion."""

    def __init__(self, message: str, auth_failed: bool = False):
        super().__init__(message)
        self.auth_failed = auth_failed

    @property
    def status_code(self) -> int:
        return 401 if self.auth_failed else 400


class MalformedInputError(CatalogError):
    status_code = 400
    message = "Malformed input"


class UploadRejectedError(CatalogError):
    """Uploaded files were refused before reaching the media store."""

    status_code = 400
    message = "Upload rejected"


class MediaStoreConfigError(RuntimeError):
    """Media store credentials are missing; raised at startup."""
