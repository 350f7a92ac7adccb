# Cordon CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `Flag` dataclass used by `FlagParser` to describe one command-line
flag in a structured, introspectable format.

Each `Flag` names the flag (plus optional aliases), the type its raw string
value is coerced to, the default used when the flag is absent, and help text.

Key Attributes:
- `name`: Primary name, written without dashes (`verbose`, not `--verbose`)
- `type`: Type or converter callable applied to the raw value
- `default`: Value stored when the flag is not given
- `aliases`: Alternate names, typically a one-letter short form
- `usage`: Help text for the help renderer
- `multiple`: Collect every occurrence into a list instead of keeping the last

Used By:
- `FlagParser`
- `Command` flag registration and lookup
- Help rendering
"""
from dataclasses import dataclass, field
from typing import Any

from cordon.exceptions import FlagDefinitionError
from cordon.parser.utils import coerce_value, type_name


@dataclass
class Flag:
    """
    Represents a command-line flag.

    Attributes:
        name (str): Primary flag name without leading dashes.
        type (Any): The type of the flag value (e.g., str, int, bool) or a callable
            that converts the raw string.
        default (Any): The value used when the flag is not provided.
        aliases (list[str]): Alternate names for the flag.
        usage (str): Help text for the flag.
        multiple (bool): True if repeated occurrences accumulate into a list.
    """

    name: str
    type: Any = str
    default: Any = None
    aliases: list[str] = field(default_factory=list)
    usage: str = ""
    multiple: bool = False

    def __post_init__(self) -> None:
        self.aliases = list(self.aliases)
        for name in self.names:
            self._validate_name(name)
        if not callable(self.type):
            raise FlagDefinitionError(
                f"Flag '{self.name}' type must be a type or a callable converter"
            )
        if self.is_bool and self.multiple:
            raise FlagDefinitionError(f"Bool flag '{self.name}' cannot be multiple")
        self.default = self._resolve_default(self.default)

    @staticmethod
    def _validate_name(name: str) -> None:
        if not isinstance(name, str) or not name:
            raise FlagDefinitionError("Flag names must be non-empty strings")
        if name.startswith("-"):
            raise FlagDefinitionError(
                f"Flag name '{name}' must not start with '-', dashes are added on the command line"
            )
        if "=" in name or any(char.isspace() for char in name):
            raise FlagDefinitionError(
                f"Flag name '{name}' must not contain '=' or whitespace"
            )

    def _resolve_default(self, default: Any) -> Any:
        if default is None:
            if self.is_bool:
                return False
            if self.multiple:
                return []
            return None
        if self.multiple:
            if not isinstance(default, (list, tuple)):
                default = [default]
            return [self._coerce_default(item) for item in default]
        return self._coerce_default(default)

    def _coerce_default(self, value: Any) -> Any:
        try:
            return coerce_value(value, self.type)
        except (ValueError, TypeError) as error:
            raise FlagDefinitionError(
                f"Default value {value!r} for '{self.name}' cannot be coerced to "
                f"{self.type_name}: {error}"
            ) from error

    @property
    def names(self) -> list[str]:
        return [self.name, *self.aliases]

    @property
    def is_bool(self) -> bool:
        return self.type is bool

    @property
    def type_name(self) -> str:
        return type_name(self.type)

    def get_flag_text(self) -> str:
        """Return the flag names as typed on the command line, e.g. `--name, -n`."""
        return ", ".join(
            f"-{name}" if len(name) == 1 else f"--{name}" for name in self.names
        )

    def get_value_text(self) -> str:
        """Return the placeholder shown after the flag in help output."""
        if self.is_bool:
            return ""
        return self.name.upper()
