# directory_app/errors.py
from typing import Optional


class StoreError(RuntimeError):
    """Raised when the store cannot be reached or rejects a request."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DraftValidationError(ValueError):
    """Raised when editor input cannot be coerced to the field's type."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
