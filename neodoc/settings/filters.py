from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Optional

from .model import Setting


def parse_bool_option(value: Optional[str]) -> Optional[bool]:
    """
    `--flag` with no value means true. Returns None when the option was not
    given at all; any value other than true or false is rejected.
    """
    if value is None:
        return None
    text = str(value).strip().lower()
    if text in ("", "true"):
        return True
    if text == "false":
        return False
    raise ValueError(f"expected true or false, got {value!r}")


@dataclass(frozen=True)
class SettingFilter:
    """
    Which settings to document. Every populated field narrows the result;
    fields are combined by logical AND in matches().
    """

    name: Optional[str] = None
    names: Optional[FrozenSet[str]] = None
    prefix: Optional[str] = None
    dynamic_only: bool = False
    # Explicit --internal=<bool>; False excludes internal settings.
    internal: Optional[bool] = None
    # --unsupported lifts the implicit "not internal" rule.
    unsupported: bool = False
    # Explicit --deprecated=<bool>; False excludes deprecated settings.
    deprecated: Optional[bool] = None
    deprecated_only: bool = False

    def matches(self, setting: Setting) -> bool:
        if setting.internal and not self.unsupported:
            return False
        if setting.internal and self.internal is False:
            return False
        if setting.deprecated and self.deprecated is False:
            return False
        if self.deprecated_only and not setting.deprecated:
            return False
        if self.dynamic_only and not setting.dynamic:
            return False
        if self.name is not None and setting.name != self.name:
            return False
        if self.names is not None and setting.name not in self.names:
            return False
        if self.prefix is not None and not setting.name.startswith(self.prefix):
            return False
        return True


def names_option(value: Optional[str]) -> Optional[FrozenSet[str]]:
    if value is None:
        return None
    return frozenset(n.strip() for n in value.split(",") if n.strip())
