import pytest

from neodoc.core.config import ConfigStore

NEO4J_ENV = ("NEO4J_URI", "NEO4J_ENTERPRISE_URI", "NEO4J_USER", "NEO4J_PASSWORD")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in NEO4J_ENV:
        monkeypatch.delenv(key, raising=False)


def test_missing_file_yields_defaults(tmp_path) -> None:
    cfg = ConfigStore(str(tmp_path / "absent.toml")).load()
    assert cfg.docs.id == "settings-reference"
    assert cfg.docs.title == "Settings reference"
    assert cfg.docs.id_prefix == "config_"
    assert cfg.sources.is_empty()
    assert cfg.neo4j.community_uri == "bolt://localhost:7687"
    assert cfg.neo4j.enterprise_uri == ""
    assert cfg.logging.level == "INFO"


def test_file_values(tmp_path) -> None:
    path = tmp_path / "neodoc.toml"
    path.write_text(
        """
[docs]
id = "op-settings"
id_prefix = "op_"

[sources]
manifests = ["a.yml", "b.yml"]

[neo4j]
community_uri = "bolt://community:7687"
enterprise_uri = "bolt://enterprise:7687"
password = "secret"

[logging]
level = "DEBUG"
""",
        encoding="utf-8",
    )
    store = ConfigStore(str(path))
    cfg = store.load()

    assert store.get() is cfg
    assert cfg.docs.id == "op-settings"
    assert cfg.docs.title == "Settings reference"
    assert cfg.docs.id_prefix == "op_"
    assert cfg.sources.manifests == ["a.yml", "b.yml"]
    assert not cfg.sources.is_empty()
    assert cfg.neo4j.community_uri == "bolt://community:7687"
    assert cfg.neo4j.enterprise_uri == "bolt://enterprise:7687"
    assert cfg.neo4j.password == "secret"
    assert cfg.logging.level == "DEBUG"


def test_environment_overrides_file(tmp_path, monkeypatch) -> None:
    path = tmp_path / "neodoc.toml"
    path.write_text('[neo4j]\ncommunity_uri = "bolt://file:7687"\n', encoding="utf-8")
    monkeypatch.setenv("NEO4J_URI", "bolt://env:7687")
    monkeypatch.setenv("NEO4J_PASSWORD", "from-env")

    cfg = ConfigStore(str(path)).load()
    assert cfg.neo4j.community_uri == "bolt://env:7687"
    assert cfg.neo4j.password == "from-env"


def test_non_table_section_is_ignored(tmp_path) -> None:
    path = tmp_path / "neodoc.toml"
    path.write_text('docs = "oops"\n', encoding="utf-8")
    assert ConfigStore(str(path)).load().docs.id == "settings-reference"
