from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from neodoc.db.neo4j_instance import Row, RowSource

from .asciidoc import escape_table_cell
from .render import TemplateRenderer

logger = logging.getLogger("neodoc.docs.functions")

FUNCTIONS_QUERY = "CALL dbms.functions()"

REFERENCE_EXCEPTIONS = {
    "functions-datetime-fromepoch": "functions-datetime-timestamp",
    "functions-datetime-fromepochmillis": "functions-datetime-timestamp",
}


class Category(Enum):
    Predicate = 1
    Scalar = 2
    Aggregating = 3
    List = 4
    Numeric = 5
    Logarithmic = 6
    Trigonometric = 7
    String = 8
    Temporal_instant_types = 9
    Temporal_duration = 10
    Spatial = 11
    LOAD_CSV = 12

    @property
    def description(self) -> str:
        return CATEGORY_DESCRIPTIONS[self]

    @property
    def label(self) -> str:
        return self.name.replace("_", " ")

    def ascii_reference(self) -> str:
        return self.name.lower().replace("_", "-")

    @classmethod
    def parse(cls, category: str, function_name: str, function_description: str) -> "Category":
        if "LOAD CSV" in function_description:
            return cls.LOAD_CSV
        if category.lower() == "temporal":
            if "duration" in function_name.lower():
                return cls.Temporal_duration
            return cls.Temporal_instant_types
        for member in cls:
            if member.name.lower() == category.lower():
                return member
        raise ValueError(f"unknown function category {category!r} for {function_name}")


def asciidoc_friendly(text: str) -> str:
    return text.replace(" | ", " \\| ")


@dataclass(frozen=True)
class FunctionDescription:
    name: str
    signature: str
    description: str
    category: Category

    @classmethod
    def from_row(cls, row: Row) -> "FunctionDescription":
        raw_name = str(row["name"])
        description = str(row.get("description") or "")
        name = raw_name if raw_name.endswith("()") else raw_name + "()"
        return cls(
            name=asciidoc_friendly(name.replace("_", " ")),
            signature=asciidoc_friendly(str(row.get("signature") or "")),
            description=description,
            category=Category.parse(str(row.get("category") or ""), raw_name, description),
        )

    def reference_name(self) -> str:
        ref = "functions-" + self.name.lower().replace("()", "").replace(".", "-")
        return REFERENCE_EXCEPTIONS.get(ref, ref)

    def row(self) -> str:
        return f"| {self.signature} | {escape_table_cell(self.description)}"

    def first_row(self, same_name_count: int) -> str:
        return (
            f"1.{same_name_count}+| <<{self.reference_name()},{self.name}>>  "
            f"| {self.signature} | {escape_table_cell(self.description)}"
        )


def group_by_category(rows: List[Row]) -> Dict[Category, List[FunctionDescription]]:
    functions: Dict[Category, List[FunctionDescription]] = {}
    for row in rows:
        f = FunctionDescription.from_row(row)
        functions.setdefault(f.category, []).append(f)
    return functions


def category_rows(functions: List[FunctionDescription]) -> List[str]:
    """Table rows for one category; overloads of one name share a spanning first cell."""
    ordered = sorted(functions, key=lambda f: f.signature)
    counts: Dict[str, int] = {}
    for f in ordered:
        counts[f.name] = counts.get(f.name, 0) + 1
    out = []
    last_name: Optional[str] = None
    for f in ordered:
        if f.name != last_name:
            out.append(f.first_row(counts[f.name]))
        else:
            out.append(f.row())
        last_name = f.name
    return out


class FunctionReferenceGenerator:
    def __init__(self, source: RowSource, renderer: Optional[TemplateRenderer] = None):
        self.source = source
        self.renderer = renderer or TemplateRenderer()

    def document(self) -> str:
        functions = group_by_category(self.source(FUNCTIONS_QUERY))
        logger.info(
            "Found %d functions in %d categories",
            sum(len(v) for v in functions.values()),
            len(functions),
        )
        sections = [
            {
                "ref": category.ascii_reference(),
                "label": category.label,
                "description": category.description,
                "rows": category_rows(functions[category]),
            }
            for category in Category
            if category in functions
        ]
        return self.renderer.render("functions.adoc.j2", sections=sections)


_NUMERIC = (
    "These functions all operate on numerical expressions only, and will return "
    "an error if used on any other values."
)

CATEGORY_DESCRIPTIONS = {
    Category.Predicate: "These functions return either true or false for the given arguments.",
    Category.Scalar: "These functions return a single value.",
    Category.Aggregating: (
        "These functions take multiple values as arguments, and calculate and return "
        "an aggregated value from them."
    ),
    Category.List: (
        "These functions return lists of other values.\n"
        "Further details and examples of lists may be found in <<cypher-lists>>."
    ),
    Category.Numeric: _NUMERIC,
    Category.Logarithmic: _NUMERIC,
    Category.Trigonometric: (
        _NUMERIC + "\n\nAll trigonometric functions operate on radians, unless "
        "otherwise specified."
    ),
    Category.String: (
        "These functions are used to manipulate strings or to create a string "
        "representation of another value."
    ),
    Category.Temporal_instant_types: (
        "Values of the <<cypher-temporal, temporal types>> -- _Date_, _Time_, "
        "_LocalTime_, _DateTime_, and _LocalDateTime_ -- can be created manipulated "
        "using the following functions:"
    ),
    Category.Temporal_duration: (
        "Duration values of the <<cypher-temporal, temporal types>> can be created "
        "manipulated using the following functions:"
    ),
    Category.Spatial: (
        "These functions are used to specify 2D or 3D points in a geographic or "
        "cartesian Coordinate Reference System and to calculate the geodesic distance "
        "between two points."
    ),
    Category.LOAD_CSV: (
        "LOAD CSV functions can be used to get information about the file that is "
        "processed by `LOAD CSV`."
    ),
}
