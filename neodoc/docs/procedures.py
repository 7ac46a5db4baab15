from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from neodoc.db.neo4j_instance import Row, RowSource

from .asciidoc import escape_table_cell
from .render import TemplateRenderer

logger = logging.getLogger("neodoc.docs.procedures")

PROCEDURES_QUERY = "CALL dbms.procedures()"
EDITIONS = ("community", "enterprise", "both")

DEFAULT_ID = "procedure-reference"
DEFAULT_TITLE = "Procedure reference"
DEFAULT_EDITION = "both"


@dataclass(frozen=True)
class Procedure:
    name: str
    signature: str
    description: str
    roles: Tuple[str, ...] = ()

    @classmethod
    def from_row(cls, row: Row) -> "Procedure":
        return cls(
            name=str(row["name"]),
            signature=str(row.get("signature") or ""),
            description=str(row.get("description") or ""),
            roles=tuple(row.get("roles") or ()),
        )


class ProcedureReferenceGenerator:
    """
    One table of every procedure. Community procedures come first; procedures
    that only exist in Enterprise Edition follow. The roles column comes from
    the enterprise server, which is the only edition that knows about roles.
    """

    def __init__(
        self,
        community: Optional[RowSource] = None,
        enterprise: Optional[RowSource] = None,
        renderer: Optional[TemplateRenderer] = None,
    ):
        self.community = community
        self.enterprise = enterprise
        self.renderer = renderer or TemplateRenderer()

    @staticmethod
    def _procedures(source: RowSource) -> Dict[str, Procedure]:
        procedures: Dict[str, Procedure] = {}
        for row in source(PROCEDURES_QUERY):
            p = Procedure.from_row(row)
            procedures[p.name] = p
        return procedures

    def _load(self, edition: str) -> Tuple[Dict[str, Procedure], Dict[str, Procedure]]:
        if edition not in EDITIONS:
            raise ValueError(f"edition must be one of {', '.join(EDITIONS)}: {edition}")
        community: Dict[str, Procedure] = {}
        enterprise: Dict[str, Procedure] = {}
        if edition in ("community", "both"):
            if self.community is None:
                raise ValueError("no community server configured")
            community = self._procedures(self.community)
        if edition in ("enterprise", "both"):
            if self.enterprise is None:
                raise ValueError("no enterprise server configured")
            enterprise = self._procedures(self.enterprise)
        logger.info(
            "Found %d community and %d enterprise procedures",
            len(community),
            len(enterprise),
        )
        return community, enterprise

    def rows(
        self, edition: str = DEFAULT_EDITION, pattern: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        community, enterprise = self._load(edition)
        ordered: List[Tuple[Procedure, str]] = []
        for p in sorted(community.values(), key=lambda p: p.name):
            roles = ",".join(enterprise[p.name].roles) if p.name in enterprise else "N/A"
            ordered.append((p, roles))
        for name in sorted(set(enterprise) - set(community)):
            p = enterprise[name]
            ordered.append((p, ",".join(p.roles)))

        matcher = re.compile(pattern) if pattern else None
        out = []
        for p, roles in ordered:
            if matcher and not matcher.fullmatch(p.name):
                continue
            out.append(
                {
                    "name": escape_table_cell(p.name),
                    "description": escape_table_cell(p.description),
                    "signature": escape_table_cell(p.signature),
                    "roles": roles or "N/A",
                }
            )
        return out

    def document(
        self,
        id: str = DEFAULT_ID,
        title: str = DEFAULT_TITLE,
        edition: str = DEFAULT_EDITION,
        pattern: Optional[str] = None,
    ) -> str:
        procedures = self.rows(edition, pattern)
        return self.renderer.render(
            "procedures.adoc.j2", id=id, title=title, procedures=procedures
        )
