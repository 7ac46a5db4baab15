import pytest

from neodoc.docs.xref import CrossReferenceFormatter, ensure_ends_with_period


@pytest.fixture
def formatter() -> CrossReferenceFormatter:
    return CrossReferenceFormatter(["dbms.a", "dbms.b", "dbms.logs.debug.level"], "config_")


def test_log_files_are_emphasised_not_linked(formatter) -> None:
    text = "Written to debug.log when dbms.b is set"
    out = formatter.format_paragraph("dbms.a", text, formatter.reference_for_html)
    assert out == "Written to _debug.log_ when <<config_dbms.b,dbms.b>> is set."


def test_known_name_ending_in_log_is_still_a_filename() -> None:
    formatter = CrossReferenceFormatter(["query.log"])
    out = formatter.transform_setting_names("see query.log", "x.y", formatter.reference_for_html)
    assert out == "see _query.log_"


def test_passthrough_markers_are_stripped(formatter) -> None:
    out = formatter.transform_setting_names(
        "Use +dbms.b+ literally", "dbms.a", formatter.reference_for_html
    )
    assert out == "Use dbms.b literally"


def test_self_reference_is_inline_code(formatter) -> None:
    out = formatter.format_paragraph("dbms.a", "dbms.a controls things", formatter.reference_for_html)
    assert out == "`dbms.a` controls things."


def test_unknown_names_are_left_alone(formatter) -> None:
    text = "Since version 3.5.1 and foo.bar"
    out = formatter.format_paragraph("dbms.a", text, formatter.reference_for_html)
    assert out == "Since version 3.5.1 and foo.bar."


def test_print_renderer_uses_inline_code(formatter) -> None:
    render = formatter.renderer("print")
    assert formatter.transform_setting_names("see dbms.b", "dbms.a", render) == "see `dbms.b`"


def test_unknown_renderer_target(formatter) -> None:
    with pytest.raises(ValueError):
        formatter.renderer("pdf")


def test_trailing_period_is_not_part_of_the_name(formatter) -> None:
    out = formatter.format_paragraph("dbms.a", "Depends on dbms.b.", formatter.reference_for_html)
    assert out == "Depends on <<config_dbms.b,dbms.b>>."


def test_ensure_ends_with_period() -> None:
    assert ensure_ends_with_period("Done") == "Done."
    assert ensure_ends_with_period("Done.") == "Done."
    assert ensure_ends_with_period("(see above)") == "(see above)"
    assert ensure_ends_with_period("") == ""


def test_references_render_known_and_unknown(formatter) -> None:
    render = formatter.reference_for_html
    assert formatter.references("dbms.b, other.thing", render) == (
        "<<config_dbms.b,dbms.b>>, `other.thing`"
    )
    assert formatter.references("", render) == ""


def test_angle_bracket_names_get_safe_ids() -> None:
    formatter = CrossReferenceFormatter(["cache.<id>.size"], "op_")
    assert formatter.reference_for_html("cache.<id>.size") == "<<op_cache.-id-.size,cache.<id>.size>>"
