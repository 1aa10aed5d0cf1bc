"""Date range validation result model."""

from pydantic import BaseModel

from backend.app.models.common import RangeErrorKind


class RangeValidation(BaseModel):
    """Outcome of a date range validation check.

    Failures are ordinary user-input rejections, returned rather than raised.
    """

    valid: bool
    error_kind: RangeErrorKind | None = None
    message: str | None = None

    @classmethod
    def ok(cls) -> "RangeValidation":
        return cls(valid=True)

    @classmethod
    def fail(cls, kind: RangeErrorKind, message: str) -> "RangeValidation":
        return cls(valid=False, error_kind=kind, message=message)
