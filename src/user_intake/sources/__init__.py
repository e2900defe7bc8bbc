"""Source subpackage — imports trigger @register_source decorators."""

from user_intake.sources.console import ConsoleSource  # noqa: F401
from user_intake.sources.json_file import JSONFileSource  # noqa: F401
from user_intake.sources.mapping import MappingSource  # noqa: F401
