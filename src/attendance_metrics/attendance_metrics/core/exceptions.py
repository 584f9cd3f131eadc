class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when caller input is invalid (bad report kind, bad date range...)."""


class InvariantViolation(DomainError):
    """Raised on programmer-error input; aborts a single employee-day."""


class StaleReference(DomainError):
    """Raised when an assignment points to a shift that no longer exists."""

    def __init__(self, shift_id: str):
        super().__init__(f"Shift {shift_id!r} no longer exists")
        self.shift_id = shift_id
