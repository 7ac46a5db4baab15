from datetime import timedelta

from neodoc.settings.model import (
    Setting,
    SettingDescription,
    id_from_name,
    parse_duration,
    render_value,
)


def test_render_value_durations() -> None:
    assert render_value(timedelta(seconds=30)) == "30s"
    assert render_value(timedelta(milliseconds=1500)) == "1500ms"
    assert render_value(parse_duration("15m")) == "900s"


def test_render_value_scalars_and_lists() -> None:
    assert render_value(None) is None
    assert render_value(True) == "true"
    assert render_value(False) == "false"
    assert render_value(300) == "300"
    assert render_value(["a", "b"]) == "a,b"


def test_id_from_name_replaces_angle_brackets() -> None:
    assert id_from_name("config_", "animal.giraffe.<id>.type") == "config_animal.giraffe.-id-.type"


def test_documented_default_wins_over_computed_default() -> None:
    s = Setting("dbms.memory.pagecache.size", default=1024, documented_default="50% of RAM")
    assert s.default_value == "50% of RAM"


def test_validation_message_falls_back_to_type() -> None:
    assert Setting("a.b", type="boolean").validation_message == "a boolean"
    assert Setting("a.b", type="integer", value_description="1..10").validation_message == "1..10"


def test_formatted_returns_new_record() -> None:
    original = SettingDescription.from_setting(
        Setting("a.b", description="text", deprecated=True), "config_"
    )
    formatted = original.formatted(str.upper)

    assert formatted is not original
    assert formatted.description == "TEXT"
    assert original.description == "text"
    assert formatted.validation_message == original.validation_message
    assert formatted.deprecation_message == "The `a.b` configuration setting has been deprecated."


def test_replacement_only_counts_when_deprecated() -> None:
    item = SettingDescription.from_setting(Setting("a.b", replacement="a.c"), "config_")
    assert not item.has_replacement
