from __future__ import annotations

import os


DEFAULT_CONFIG_PATH = "neodoc.toml"
DEFAULT_NEO4J_URI = "bolt://localhost:7687"
DEFAULT_NEO4J_ENTERPRISE_URI = ""
DEFAULT_NEO4J_USER = "neo4j"
DEFAULT_NEO4J_PASSWORD = ""


def resolve_config_path() -> str:
    return os.environ.get("NEODOC_CONFIG", DEFAULT_CONFIG_PATH)


def resolve_neo4j_uri(default: str = DEFAULT_NEO4J_URI) -> str:
    return os.environ.get("NEO4J_URI", default)


def resolve_neo4j_enterprise_uri(default: str = DEFAULT_NEO4J_ENTERPRISE_URI) -> str:
    return os.environ.get("NEO4J_ENTERPRISE_URI", default)


def resolve_neo4j_user(default: str = DEFAULT_NEO4J_USER) -> str:
    return os.environ.get("NEO4J_USER", default)


def resolve_neo4j_password(default: str = DEFAULT_NEO4J_PASSWORD) -> str:
    return os.environ.get("NEO4J_PASSWORD", default)
