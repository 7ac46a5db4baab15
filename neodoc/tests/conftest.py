from __future__ import annotations

import textwrap

import pytest

NEO4J_ENV = ("NEO4J_URI", "NEO4J_ENTERPRISE_URI", "NEO4J_USER", "NEO4J_PASSWORD", "NEODOC_CONFIG")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in NEO4J_ENV:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def manifest(tmp_path):
    path = tmp_path / "settings.yml"
    path.write_text(
        textwrap.dedent(
            """
            settings:
              - name: dbms.a
                description: Dynamic one. Mentions dbms.b and debug.log
                dynamic: true
              - name: dbms.b
                description: Static one.
                type: duration
                default: 1500ms
              - name: other.c
                description: Another dynamic one.
                dynamic: true
              - name: unsupported.dbms.x
                description: Hidden.
                internal: true
              - name: dbms.old
                description: This setting is deprecated. Use dbms.b instead.
                deprecated: true
                replaced_by: dbms.b
            """
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def config_file(tmp_path):
    def _write(text: str = ""):
        path = tmp_path / "neodoc.toml"
        path.write_text(textwrap.dedent(text), encoding="utf-8")
        return path

    return _write
