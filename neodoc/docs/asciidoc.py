from __future__ import annotations

import re
from typing import List, Optional

from neodoc.settings.model import SettingDescription

IFDEF_HTMLOUTPUT = "ifndef::nonhtmloutput[]\n"
IFDEF_NONHTMLOUTPUT = "ifdef::nonhtmloutput[]\n"
ENDIF = "endif::nonhtmloutput[]\n\n"

ENTERPRISE_LABEL = "label:enterprise-edition[Enterprise only]"
# First sentences shorter than this that mention "deprecated" say too little on their own.
SHORT_SENTENCE = 30

_UNESCAPED_CELL_SEPARATOR = re.compile(r"(?<!\\)\|")


def escape_table_cell(text: str) -> str:
    return _UNESCAPED_CELL_SEPARATOR.sub(r"\\|", text)


def shorten_description(description: str) -> str:
    """
    Cut the description down to its first sentence. When that sentence is a
    bare "This setting is deprecated." one more sentence is kept.
    """
    pos = description.find(". ")
    if pos == -1:
        pos = description.find("; ")
    elif pos < SHORT_SENTENCE and "deprecated" in description[:pos]:
        pos = description.find(". ", pos + 1)
    if pos > 10:
        description = description[:pos] + "."
    return description


class AsciiDocListGenerator:
    """Summary of settings: a linked table for HTML, a bulleted list for print."""

    def __init__(self, list_id: Optional[str], title: Optional[str], shorten: bool = True):
        self.list_id = list_id
        self.title = title
        self.shorten = shorten

    def _summary_line(self, item: SettingDescription) -> str:
        description = item.description or f"No description available for `{item.name}`."
        if item.enterprise:
            description = ENTERPRISE_LABEL + description
        if self.shorten:
            description = shorten_description(description)
        if not description.endswith("."):
            description += "."
        return description

    def generate_list_and_table_combo(self, items: List[SettingDescription]) -> str:
        table: List[str] = []
        listing: List[str] = []
        table.append(f"// tag::{self.list_id}[]\n")
        if self.list_id is not None:
            table.append(f"[[{self.list_id}]]\n")
        if self.title is not None:
            table.append(f".{self.title}\n")
        table.append(IFDEF_HTMLOUTPUT)
        table.append('[options="header"]\n')
        table.append("|===\n")
        table.append("|Name|Description\n")
        listing.append(IFDEF_NONHTMLOUTPUT)
        for item in items:
            description = self._summary_line(item)
            table.append(f"|<<{item.id},{item.name}>>|{escape_table_cell(description)}\n")
            listing.append(f"* <<{item.id},{item.name}>>: {description}\n")
        table.append("|===\n")
        table.append(ENDIF)
        listing.append(ENDIF)
        listing.append("\n")
        return "".join(table) + "".join(listing) + f"// end::{self.list_id}[]\n\n"


def render_setting_details(item: SettingDescription, replaced_by: str = "") -> str:
    """
    Detail block for one setting. `item` is expected to be formatted already;
    `replaced_by` is the rendered list of replacement references.
    """
    lines = [
        f"[[{item.id}]]",
        f".{item.name}",
        '[cols="<1h,<4"]',
        "|===",
        "|Description",
        "a|" + escape_table_cell(item.description or "No description available."),
        "|Valid values",
        "a|" + escape_table_cell(item.validation_message),
    ]
    if item.dynamic:
        lines.append("|Dynamic a|true")
    if item.has_default:
        lines.append("|Default value")
        lines.append("m|" + escape_table_cell(item.default_value or ""))
    if item.deprecated:
        lines.append("|Deprecated")
        lines.append("a|" + item.deprecation_message)
        if item.has_replacement and replaced_by:
            lines.append("|Replaced by")
            lines.append("a|" + replaced_by)
    if item.internal:
        lines.append("|Internal")
        lines.append(f"a|{item.name} is an internal, unsupported setting.")
    lines.append("|===")
    return "\n".join(lines) + "\n\n"
