"""AsciiDoc reference documentation for Neo4j configuration, procedures and functions."""

__version__ = "0.1.0"
