from __future__ import annotations

import re
from dataclasses import dataclass, replace
from datetime import timedelta
from typing import Any, Callable, Optional

DEPRECATION_MESSAGE = "The `{name}` configuration setting has been deprecated."

VALUE_DESCRIPTIONS = {
    "boolean": "a boolean",
    "integer": "an integer",
    "long": "a long",
    "double": "a double",
    "string": "a string",
    "path": "a path",
    "list": "a comma-separated list where each element is a string",
    "duration": (
        "a duration (Valid units are: `ns`, `μs`, `ms`, `s`, `m`, `h` and `d`; "
        "default unit is `s`)"
    ),
    "byte_size": (
        "a byte size (valid multipliers are `B`, `KiB`, `KB`, `K`, `kB`, `kb`, `k`, "
        "`MiB`, `MB`, `M`, `mB`, `mb`, `m`, `GiB`, `GB`, `G`, `gB`, `gb`, `g`, "
        "`TiB`, `TB`, `PiB`, `PB`, `EiB`, `EB`)"
    ),
    "socket_address": "a socket address in the format `hostname:port`, `hostname` or `:port`",
}

_DURATION_RE = re.compile(r"^\s*(\d+)\s*(ms|s|m|h|d)?\s*$")
_DURATION_UNITS = {
    "ms": timedelta(milliseconds=1),
    "s": timedelta(seconds=1),
    "m": timedelta(minutes=1),
    "h": timedelta(hours=1),
    "d": timedelta(days=1),
}


def parse_duration(text: str) -> timedelta:
    m = _DURATION_RE.match(str(text))
    if not m:
        raise ValueError(f"not a duration: {text!r}")
    return int(m.group(1)) * _DURATION_UNITS[m.group(2) or "s"]


def render_duration(value: timedelta) -> str:
    ms = int(round(value.total_seconds() * 1000))
    if ms % 1000 == 0:
        return f"{ms // 1000}s"
    return f"{ms}ms"


def render_value(value: Any) -> Optional[str]:
    """String form of a programmatic default, as it would appear in neo4j.conf."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, timedelta):
        return render_duration(value)
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


def id_from_name(id_prefix: str, name: str) -> str:
    return id_prefix + name.replace("<", "-").replace(">", "-")


@dataclass(frozen=True)
class Setting:
    """Explicit manifest entry for one configuration key."""

    name: str
    description: Optional[str] = None
    type: str = "string"
    value_description: Optional[str] = None
    default: Any = None
    documented_default: Optional[str] = None
    deprecated: bool = False
    replacement: Optional[str] = None
    internal: bool = False
    dynamic: bool = False
    enterprise: bool = False

    @property
    def validation_message(self) -> str:
        if self.value_description:
            return self.value_description
        return VALUE_DESCRIPTIONS.get(self.type, f"a {self.type.replace('_', ' ')}")

    @property
    def default_value(self) -> Optional[str]:
        if self.documented_default is not None:
            return self.documented_default
        return render_value(self.default)


@dataclass(frozen=True)
class SettingDescription:
    id: str
    name: str
    validation_message: str
    description: Optional[str] = None
    default_value: Optional[str] = None
    deprecated: bool = False
    replaced_by: Optional[str] = None
    internal: bool = False
    dynamic: bool = False
    enterprise: bool = False

    @classmethod
    def from_setting(cls, setting: Setting, id_prefix: str) -> "SettingDescription":
        return cls(
            id=id_from_name(id_prefix, setting.name),
            name=setting.name,
            validation_message=setting.validation_message,
            description=setting.description,
            default_value=setting.default_value,
            deprecated=setting.deprecated,
            replaced_by=setting.replacement,
            internal=setting.internal,
            dynamic=setting.dynamic,
            enterprise=setting.enterprise,
        )

    @property
    def has_default(self) -> bool:
        return self.default_value is not None

    @property
    def has_replacement(self) -> bool:
        return self.deprecated and bool(self.replaced_by)

    @property
    def deprecation_message(self) -> str:
        return DEPRECATION_MESSAGE.format(name=self.name)

    def formatted(self, fmt: Callable[[str], str]) -> "SettingDescription":
        """
        Return a copy with the prose description passed through fmt.
        The validation message is left alone: it is full of technical
        terms that the setting-name matcher would mangle.
        """
        if self.description is None:
            return self
        return replace(self, description=fmt(self.description))
