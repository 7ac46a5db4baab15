from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional

import yaml

from .filters import SettingFilter
from .model import Setting, SettingDescription, parse_duration

logger = logging.getLogger("neodoc.settings.registry")

PACKS_DIR = Path(__file__).resolve().parent / "packs"
DEFAULT_PACK = "neo4j_server"


class SettingsSourceError(RuntimeError):
    """A settings source could not be read; the documentation run must stop."""


class SettingsRegistry:
    def __init__(self, settings: Iterable[Setting] = ()) -> None:
        self._settings: Dict[str, Setting] = {}
        for setting in settings:
            self.register(setting)

    def register(self, setting: Setting) -> None:
        if not setting.name:
            raise SettingsSourceError("Setting.name missing")
        if setting.name in self:
            raise SettingsSourceError(f"Duplicate setting `{setting.name}`")
        self._settings[setting.name] = setting

    def get(self, name: str) -> Optional[Setting]:
        return self._settings.get(name)

    def all(self) -> List[Setting]:
        return list(self._settings.values())

    def union(self, other: "SettingsRegistry") -> "SettingsRegistry":
        return SettingsRegistry([*self.all(), *other.all()])

    def __len__(self) -> int:
        return len(self._settings)

    def __iter__(self) -> Iterator[Setting]:
        return iter(self._settings.values())

    def __contains__(self, name: object) -> bool:
        return name in self._settings


def _setting_from_dict(d: Dict[str, Any], source: str) -> Setting:
    if not isinstance(d, dict) or not d.get("name"):
        raise SettingsSourceError(f"{source}: setting entry without a name: {d!r}")
    kind = str(d.get("type", "string"))
    default = d.get("default")
    if kind == "duration" and default is not None:
        try:
            default = parse_duration(default)
        except ValueError as exc:
            raise SettingsSourceError(f"{source}: {d['name']}: {exc}") from exc
    documented = d.get("documented_default")
    description = d.get("description")
    return Setting(
        name=str(d["name"]),
        description=str(description).strip() if description is not None else None,
        type=kind,
        value_description=d.get("valid_values"),
        default=default,
        documented_default=str(documented) if documented is not None else None,
        deprecated=bool(d.get("deprecated", False)),
        replacement=d.get("replaced_by"),
        internal=bool(d.get("internal", False)),
        dynamic=bool(d.get("dynamic", False)),
        enterprise=bool(d.get("enterprise", False)),
    )


def load_manifest(path: str) -> SettingsRegistry:
    p = Path(path)
    if not p.exists():
        raise SettingsSourceError(f"Settings manifest not found: {path}")
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise SettingsSourceError(f"Settings manifest {path} is not valid YAML") from exc
    entries = data.get("settings") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        raise SettingsSourceError(f"Settings manifest {path} has no `settings` list")
    reg = SettingsRegistry(_setting_from_dict(e, path) for e in entries)
    logger.info("Loaded %d settings from %s", len(reg), path)
    return reg


def load_pack(name: str = DEFAULT_PACK) -> SettingsRegistry:
    return load_manifest(str(PACKS_DIR / f"{name}.yml"))


def settings_from_module(dotted: str) -> SettingsRegistry:
    try:
        module = importlib.import_module(dotted)
    except ImportError as exc:
        raise SettingsSourceError(f"Cannot import settings module {dotted}") from exc
    settings = getattr(module, "SETTINGS", None)
    if not isinstance(settings, (list, tuple)):
        raise SettingsSourceError(f"Module {dotted} does not expose a SETTINGS list")
    for s in settings:
        if not isinstance(s, Setting):
            raise SettingsSourceError(f"{dotted}.SETTINGS holds a non-Setting: {s!r}")
    reg = SettingsRegistry(settings)
    logger.info("Loaded %d settings from module %s", len(reg), dotted)
    return reg


def describe_class(cls: type) -> SettingsRegistry:
    """
    Collect the Setting attributes of a settings class.

    Classes with a truthy `group` attribute build their settings per
    instance (the key is part of the name), so they are instantiated with
    no arguments first. Internal settings are left out; a public setting
    without a description is an error.
    """
    holder: Any = cls
    if getattr(cls, "group", False):
        try:
            holder = cls()
        except Exception as exc:
            raise SettingsSourceError(
                f"Cannot instantiate settings group {cls.__qualname__}"
            ) from exc

    names = [n for n in dir(holder) if not n.startswith("_")]
    reg = SettingsRegistry()
    for attr in names:
        setting = getattr(holder, attr)
        if not isinstance(setting, Setting):
            continue
        if setting.internal:
            continue
        if not setting.description:
            raise SettingsSourceError(
                f"Public setting `{setting.name}` is missing description in "
                f"{cls.__module__}.{cls.__qualname__}."
            )
        reg.register(setting)
    logger.info("Loaded %d settings from class %s", len(reg), cls.__qualname__)
    return reg


def resolve_class(target: str) -> type:
    module_name, _, class_name = target.partition(":")
    if not module_name or not class_name:
        raise SettingsSourceError(f"Expected <module>:<Class>, got {target!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise SettingsSourceError(f"Cannot import settings module {module_name}") from exc
    obj: Any = module
    for part in class_name.split("."):
        obj = getattr(obj, part, None)
        if obj is None:
            raise SettingsSourceError(f"{module_name} has no class {class_name}")
    if not isinstance(obj, type):
        raise SettingsSourceError(f"{target} is not a class")
    return obj


def build_registry(
    manifests: Iterable[str] = (),
    modules: Iterable[str] = (),
    classes: Iterable[str] = (),
) -> SettingsRegistry:
    """Union of all given sources; the bundled server pack when none are given."""
    parts: List[SettingsRegistry] = []
    parts.extend(load_manifest(m) for m in manifests)
    parts.extend(settings_from_module(m) for m in modules)
    parts.extend(describe_class(resolve_class(c)) for c in classes)
    if not parts:
        return load_pack()
    reg = SettingsRegistry()
    for part in parts:
        reg = reg.union(part)
    return reg


def enumerate_settings(
    registry: SettingsRegistry,
    setting_filter: Optional[SettingFilter] = None,
    id_prefix: str = "config_",
) -> List[SettingDescription]:
    setting_filter = setting_filter or SettingFilter()
    selected = [s for s in registry if setting_filter.matches(s)]
    selected.sort(key=lambda s: s.name)
    for s in selected:
        for replacement in (s.replacement or "").split(","):
            replacement = replacement.strip()
            if replacement and registry.get(replacement) is None:
                logger.warning("%s is replaced by unknown setting %s", s.name, replacement)
    logger.debug("%d of %d settings selected", len(selected), len(registry))
    return [SettingDescription.from_setting(s, id_prefix) for s in selected]
