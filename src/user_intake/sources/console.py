"""Console source — prompts the operator for each field on a terminal."""

from __future__ import annotations

import sys
from typing import Any, TextIO

from user_intake.registry import register_source
from user_intake.sources.base import BaseSource

PROMPTS: dict[str, str] = {
    "name": "Enter Name: ",
    "age": "Enter Age: ",
    "email": "Enter Email: ",
    "phone": "Enter Phone: ",
    "gender": "Enter Gender: ",
    "country": "Enter Country: ",
    "dob": "Enter Date of Birth (YYYY-MM-DD): ",
}


@register_source("console")
class ConsoleSource(BaseSource):
    """Prompt on *stdout* and read one line per field from *stdin*.

    Streams default to the process's own; tests pass ``io.StringIO``.
    End of input yields ``None`` for the field being asked and for every
    later field, without prompting again.
    """

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        *,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        super().__init__(config)
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self._exhausted = False

    def supplies(self, field: str) -> str | None:
        if self._exhausted:
            return None
        self._stdout.write(PROMPTS.get(field, f"Enter {field}: "))
        self._stdout.flush()
        line = self._stdin.readline()
        if not line:
            self._exhausted = True
            return None
        return line.rstrip("\r\n")
