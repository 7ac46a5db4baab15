"""AsciiDoc generators for settings, procedures and functions."""

from .config_docs import ConfigDocsGenerator
from .functions import FunctionReferenceGenerator
from .procedures import ProcedureReferenceGenerator
from .xref import CrossReferenceFormatter

__all__ = [
    "ConfigDocsGenerator",
    "CrossReferenceFormatter",
    "FunctionReferenceGenerator",
    "ProcedureReferenceGenerator",
]
