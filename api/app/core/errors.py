"""Schedule engine errors and their HTTP mapping.

ConfigurationError marks a data-entry problem upstream (bad time strings,
inverted tee bounds, out-of-range intervals, ambiguous overrides). It is
surfaced to the caller as-is and never silently corrected.
"""

from fastapi import HTTPException, status


class ConfigurationError(Exception):
    """Raised when a schedule configuration cannot be resolved deterministically."""

    def __init__(self, rule: str, message: str):
        self.rule = rule
        self.message = message
        super().__init__(message)

    def as_detail(self) -> dict:
        return {"rule": self.rule, "message": self.message}


def configuration_errors_to_http(errors: list[ConfigurationError]) -> HTTPException:
    """Map one or more configuration errors to a 422 with the rule/message detail list."""
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=[e.as_detail() for e in errors],
    )
