from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from .paths import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_NEO4J_ENTERPRISE_URI,
    DEFAULT_NEO4J_PASSWORD,
    DEFAULT_NEO4J_URI,
    DEFAULT_NEO4J_USER,
    resolve_neo4j_enterprise_uri,
    resolve_neo4j_password,
    resolve_neo4j_uri,
    resolve_neo4j_user,
)


def _read_toml(path: Path) -> Dict[str, Any]:
    if not path.is_file():
        return {}
    text = path.read_text(encoding="utf-8")
    if sys.version_info >= (3, 11):
        import tomllib

        return tomllib.loads(text)
    import tomli  # type: ignore

    return tomli.loads(text)


@dataclass
class DocsCfg:
    id: str = "settings-reference"
    title: str = "Settings reference"
    id_prefix: str = "config_"


@dataclass
class SourcesCfg:
    manifests: List[str] = field(default_factory=list)
    modules: List[str] = field(default_factory=list)
    classes: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.manifests or self.modules or self.classes)


@dataclass
class Neo4jCfg:
    community_uri: str = DEFAULT_NEO4J_URI
    enterprise_uri: str = DEFAULT_NEO4J_ENTERPRISE_URI
    user: str = DEFAULT_NEO4J_USER
    password: str = DEFAULT_NEO4J_PASSWORD
    database: str = "neo4j"


@dataclass
class LoggingCfg:
    level: str = "INFO"


@dataclass
class AppConfig:
    docs: DocsCfg
    sources: SourcesCfg
    neo4j: Neo4jCfg
    logging: LoggingCfg


def _section(d: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = d.get(key, {})
    return value if isinstance(value, dict) else {}


class ConfigStore:
    """
    Loads neodoc.toml into AppConfig. A missing file yields defaults;
    NEO4J_* environment variables win over the file.
    """

    def __init__(self, path: str = DEFAULT_CONFIG_PATH):
        self.path = path
        self._cfg: AppConfig = self._from_dict({})

    def _from_dict(self, d: Dict[str, Any]) -> AppConfig:
        docs = _section(d, "docs")
        sources = _section(d, "sources")
        neo4j = _section(d, "neo4j")
        log = _section(d, "logging")

        return AppConfig(
            docs=DocsCfg(
                id=str(docs.get("id", "settings-reference")),
                title=str(docs.get("title", "Settings reference")),
                id_prefix=str(docs.get("id_prefix", "config_")),
            ),
            sources=SourcesCfg(
                manifests=list(sources.get("manifests", []) or []),
                modules=list(sources.get("modules", []) or []),
                classes=list(sources.get("classes", []) or []),
            ),
            neo4j=Neo4jCfg(
                community_uri=resolve_neo4j_uri(
                    str(neo4j.get("community_uri", DEFAULT_NEO4J_URI))
                ),
                enterprise_uri=resolve_neo4j_enterprise_uri(
                    str(neo4j.get("enterprise_uri", DEFAULT_NEO4J_ENTERPRISE_URI))
                ),
                user=resolve_neo4j_user(str(neo4j.get("user", DEFAULT_NEO4J_USER))),
                password=resolve_neo4j_password(
                    str(neo4j.get("password", DEFAULT_NEO4J_PASSWORD))
                ),
                database=str(neo4j.get("database", "neo4j")),
            ),
            logging=LoggingCfg(
                level=str(log.get("level", "INFO")),
            ),
        )

    def load(self) -> AppConfig:
        self._cfg = self._from_dict(_read_toml(Path(self.path)))
        return self._cfg

    def get(self) -> AppConfig:
        return self._cfg
