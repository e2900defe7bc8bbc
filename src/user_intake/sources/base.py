"""Base input-source interface.

A source answers one question, ``supplies(field)``: the raw string for a
field, or ``None`` when it has nothing.  Blank and missing values are the
validator's concern, not the source's.
"""

from __future__ import annotations

import abc
from typing import Any

from user_intake.schemas.user import FIELDS, RawRecord


class BaseSource(abc.ABC):
    """Supply raw field strings for a single user record.

    Lifecycle (called by the engine in this order):
        1. __init__(config)  — receive the source config.
        2. open()            — acquire the underlying stream or file.
        3. read()            — collect every field into a RawRecord.
        4. close()           — release resources (called even on failure).
    """

    def __init__(self, config: Any = None) -> None:
        self._config = config if config is not None else {}

    @property
    def name(self) -> str:
        return self.__class__.__name__

    # -- lifecycle hooks -----------------------------------------------------

    def open(self) -> None:
        """Acquire resources.  Default is a no-op."""

    @abc.abstractmethod
    def supplies(self, field: str) -> str | None:
        """Return the raw string for *field*, or ``None`` if unavailable."""
        ...

    def read(self) -> RawRecord:
        """Collect every field in declaration order.

        ``None`` values are kept so the validator can name the missing field.
        """
        return {field: self.supplies(field) for field in FIELDS}

    def close(self) -> None:
        """Release resources.  Default is a no-op."""

    # -- context-manager support ---------------------------------------------

    def __enter__(self) -> BaseSource:
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        self.close()
