# kasir_api/errors.py
# Error kinds shared by stores, services and handlers.
# Handlers map them to status codes; nothing below the handlers knows about HTTP.


class KasirError(Exception):
    """Base class for every error raised by the store and service layers."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class NotFoundError(KasirError):
    """The requested id does not exist in its collection."""

    def __init__(self, resource: str, record_id: int):
        super().__init__(f"{resource} not found")
        self.resource = resource
        self.record_id = record_id


class ValidationError(KasirError):
    """A required field is missing or a field holds an invalid value."""


class StoreError(KasirError):
    """The backing store failed."""
