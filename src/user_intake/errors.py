"""Error taxonomy shared by the validator, the store, and the CLI.

Components raise these and never catch them; only the entry point turns an
``IntakeError`` into an operator-facing message and an exit status.
"""

from __future__ import annotations


class IntakeError(Exception):
    """Base class for every failure the intake run reports to the operator."""


class ValidationError(IntakeError):
    """A raw field violates its rule.  Recoverable: re-prompt or reject."""

    def __init__(self, reason: str, field: str | None = None) -> None:
        self.reason = reason
        self.field = field
        super().__init__(reason)


class MissingFieldError(ValidationError):
    """A required field was not supplied at all."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Missing required field: {field}", field=field)


class PersistenceError(IntakeError):
    """Connecting, provisioning the schema, or inserting failed."""

    def __init__(self, message: str, stage: str | None = None) -> None:
        self.stage = stage
        super().__init__(message)
