from __future__ import annotations

import logging
from typing import List, Optional

from neodoc.settings.filters import SettingFilter
from neodoc.settings.model import SettingDescription
from neodoc.settings.registry import SettingsRegistry, enumerate_settings

from .asciidoc import AsciiDocListGenerator, render_setting_details
from .xref import CrossReferenceFormatter

logger = logging.getLogger("neodoc.docs.config_docs")

DEFAULT_ID = "settings-reference"
DEFAULT_TITLE = "Settings reference"
DEFAULT_ID_PREFIX = "config_"


class ConfigDocsGenerator:
    def __init__(self, registry: SettingsRegistry):
        self.registry = registry

    def describe(
        self, setting_filter: Optional[SettingFilter], id_prefix: str
    ) -> List[SettingDescription]:
        return enumerate_settings(self.registry, setting_filter, id_prefix)

    def document(
        self,
        setting_filter: Optional[SettingFilter] = None,
        id: str = DEFAULT_ID,
        title: str = DEFAULT_TITLE,
        id_prefix: str = DEFAULT_ID_PREFIX,
        target: str = "html",
    ) -> str:
        items = self.describe(setting_filter, id_prefix)
        formatter = CrossReferenceFormatter((i.name for i in items), id_prefix)
        render = formatter.renderer(target)

        parts = [AsciiDocListGenerator(id, title, shorten=True).generate_list_and_table_combo(items)]
        for item in items:
            formatted = item.formatted(
                lambda p, name=item.name: formatter.format_paragraph(name, p, render)
            )
            replaced_by = formatter.references(item.replaced_by or "", render)
            parts.append(render_setting_details(formatted, replaced_by))
        logger.info("Documented %d settings (id=%s, target=%s)", len(items), id, target)
        return "".join(parts)
