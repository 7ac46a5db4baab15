import re

from neodoc.docs.config_docs import ConfigDocsGenerator
from neodoc.settings.filters import SettingFilter
from neodoc.settings.model import Setting
from neodoc.settings.registry import SettingsRegistry, load_pack

REGISTRY = SettingsRegistry(
    [
        Setting("public.default", description="Public with default", type="integer", default=1),
        Setting(
            "public.deprecated",
            description="Public deprecated",
            type="boolean",
            default=False,
            deprecated=True,
            replacement="public.default",
        ),
        Setting(
            "public.nodefault",
            description="Public nodefault. See public.default for a value",
        ),
        Setting("unsupported.internal", description="Internal", internal=True),
    ]
)

EXPECTED = """\
// tag::settings-reference[]
[[settings-reference]]
.Settings reference
ifndef::nonhtmloutput[]
[options="header"]
|===
|Name|Description
|<<config_public.default,public.default>>|Public with default.
|<<config_public.deprecated,public.deprecated>>|Public deprecated.
|<<config_public.nodefault,public.nodefault>>|Public nodefault.
|===
endif::nonhtmloutput[]

ifdef::nonhtmloutput[]
* <<config_public.default,public.default>>: Public with default.
* <<config_public.deprecated,public.deprecated>>: Public deprecated.
* <<config_public.nodefault,public.nodefault>>: Public nodefault.
endif::nonhtmloutput[]


// end::settings-reference[]

[[config_public.default]]
.public.default
[cols="<1h,<4"]
|===
|Description
a|Public with default.
|Valid values
a|an integer
|Default value
m|1
|===

[[config_public.deprecated]]
.public.deprecated
[cols="<1h,<4"]
|===
|Description
a|Public deprecated.
|Valid values
a|a boolean
|Default value
m|false
|Deprecated
a|The `public.deprecated` configuration setting has been deprecated.
|Replaced by
a|<<config_public.default,public.default>>
|===

[[config_public.nodefault]]
.public.nodefault
[cols="<1h,<4"]
|===
|Description
a|Public nodefault. See <<config_public.default,public.default>> for a value.
|Valid values
a|a string
|===

"""


def test_full_document() -> None:
    assert ConfigDocsGenerator(REGISTRY).document() == EXPECTED


def test_document_is_idempotent() -> None:
    gen = ConfigDocsGenerator(load_pack())
    assert gen.document() == gen.document()


def test_summary_and_details_cover_the_same_settings() -> None:
    doc = ConfigDocsGenerator(load_pack()).document(id_prefix="op_")
    summary, _, details = doc.partition("// end::settings-reference[]")

    linked = re.findall(r"^\|<<op_[^,]+,([^>]+)>>\|", summary, flags=re.M)
    detailed = re.findall(r"^\.(\S+)\n\[cols=", details, flags=re.M)
    assert linked
    assert linked == detailed


def test_anchors_are_unique() -> None:
    doc = ConfigDocsGenerator(load_pack()).document(SettingFilter(unsupported=True))
    anchors = re.findall(r"^\[\[([^\]]+)\]\]$", doc, flags=re.M)
    assert len(anchors) == len(set(anchors))


def test_print_target_has_no_links_in_details() -> None:
    doc = ConfigDocsGenerator(REGISTRY).document(target="print")
    _, _, details = doc.partition("// end::settings-reference[]")
    assert "a|Public nodefault. See `public.default` for a value." in details
    assert "a|`public.default`" in details
    assert "<<config_public.default" not in details


def test_references_to_filtered_out_settings_stay_plain() -> None:
    doc = ConfigDocsGenerator(REGISTRY).document(SettingFilter(name="public.nodefault"))
    assert "a|Public nodefault. See public.default for a value." in doc


def test_internal_settings_need_unsupported() -> None:
    gen = ConfigDocsGenerator(REGISTRY)
    assert "unsupported.internal" not in gen.document()

    doc = gen.document(SettingFilter(unsupported=True))
    assert "[[config_unsupported.internal]]" in doc
    assert "a|unsupported.internal is an internal, unsupported setting." in doc


def test_pack_settings_render_durations_and_documented_defaults() -> None:
    doc = ConfigDocsGenerator(load_pack()).document()
    assert "[[config_dbms.checkpoint.interval.time]]" in doc
    assert "m|900s" in doc
