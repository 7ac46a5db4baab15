from __future__ import annotations

import re
from typing import Callable, Iterable

from neodoc.settings.model import id_from_name

CONFIG_SETTING_PATTERN = re.compile(r"\+?[a-z0-9]+((\.|_)[a-z0-9]+)+\+?")
ENDS_WITH_WORD_CHAR = re.compile(r"\w$")
LOG_FILE_SUFFIX = ".log"
PASSTHROUGH_MARK = "+"

Renderer = Callable[[str], str]


def ensure_ends_with_period(message: str) -> str:
    if ENDS_WITH_WORD_CHAR.search(message):
        return message + "."
    return message


def inline_code(text: str) -> str:
    return f"`{text}`"


class CrossReferenceFormatter:
    """
    Turns setting-name shaped words in prose into links, inline code or
    filenames. Only names in `known_names` are ever linked.
    """

    def __init__(self, known_names: Iterable[str], id_prefix: str = "config_"):
        self._known = frozenset(known_names)
        self.id_prefix = id_prefix

    def is_known(self, name: str) -> bool:
        return name in self._known

    def reference_for_html(self, name: str) -> str:
        return f"<<{id_from_name(self.id_prefix, name)},{name}>>"

    def reference_for_print(self, name: str) -> str:
        return inline_code(name)

    def renderer(self, target: str) -> Renderer:
        if target == "html":
            return self.reference_for_html
        if target == "print":
            return self.reference_for_print
        raise ValueError(f"unknown output target: {target}")

    def transform_setting_names(
        self, text: str, setting_being_rendered: str, render: Renderer
    ) -> str:
        def _sub(m: re.Match) -> str:
            match = m.group(0)
            if match.endswith(LOG_FILE_SUFFIX):
                # a filename
                return f"_{match}_"
            if (
                len(match) > 1
                and match.startswith(PASSTHROUGH_MARK)
                and match.endswith(PASSTHROUGH_MARK)
            ):
                return match[1:-1]
            if match == setting_being_rendered:
                return inline_code(match)
            if not self.is_known(match):
                return match
            return render(match)

        return CONFIG_SETTING_PATTERN.sub(_sub, text)

    def format_paragraph(
        self, setting_name: str, paragraph: str, render: Renderer
    ) -> str:
        return ensure_ends_with_period(
            self.transform_setting_names(paragraph, setting_name, render)
        )

    def references(self, text: str, render: Renderer) -> str:
        """Comma-separated references for every setting name in text."""
        out = []
        for m in CONFIG_SETTING_PATTERN.finditer(text or ""):
            name = m.group(0).strip(PASSTHROUGH_MARK)
            out.append(render(name) if self.is_known(name) else inline_code(name))
        return ", ".join(out)
