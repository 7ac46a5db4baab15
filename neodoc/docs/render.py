from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

DEFAULT_TEMPLATES_DIR = str(Path(__file__).resolve().parents[1] / "templates")


@dataclass
class RenderConfig:
    templates_dir: str = DEFAULT_TEMPLATES_DIR


class TemplateRenderer:
    def __init__(self, cfg: RenderConfig | None = None):
        cfg = cfg or RenderConfig()
        self.env = Environment(
            loader=FileSystemLoader(cfg.templates_dir),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def render(self, template: str, **ctx: Any) -> str:
        return self.env.get_template(template).render(**ctx)
