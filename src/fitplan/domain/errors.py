"""Errors raised by the planning engine."""


class FitplanError(Exception):
    """Base error for target calculation and plan generation."""


class IncompleteProfileError(FitplanError):
    """Raised when required physiology fields are missing."""

    def __init__(self, missing_fields: list[str]) -> None:
        self.missing_fields = missing_fields
        super().__init__(
            "Profile is incomplete, missing: " + ", ".join(missing_fields)
        )


class InvalidTargetError(FitplanError):
    """Raised when calorie or macro targets are unusable."""


class ExternalServiceError(FitplanError):
    """Raised when the completion service fails or returns nothing."""


class UnparsableResponseError(FitplanError):
    """Raised when model output does not match the expected shape."""
