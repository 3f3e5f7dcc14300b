"""Errors raised by the ingredient lifecycle rules and their collaborators."""


class FreshnessError(Exception):
    """Base class for recoverable ingredient errors shown to the user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(FreshnessError):
    """A required field is empty or a value is outside its vocabulary."""


class InvalidOperation(FreshnessError):
    """The operation does not apply to this ingredient (e.g. check-in on canned food)."""


class NotFound(FreshnessError):
    """The referenced ingredient or product does not exist."""
