from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from neo4j import GraphDatabase

logger = logging.getLogger("neodoc.db.neo4j_instance")

Row = Dict[str, Any]
RowSource = Callable[[str], List[Row]]


class Neo4jInstance:
    """
    One running Neo4j server, reached over Bolt. Use as a context manager;
    the driver is closed on exit whatever happened inside.
    """

    def __init__(
        self,
        uri: str,
        user: str = "neo4j",
        password: str = "",
        database: Optional[str] = None,
    ):
        self.uri = uri
        self.user = user
        self.password = password
        self.database = database
        self._driver = None

    def open(self) -> "Neo4jInstance":
        auth = (self.user, self.password) if self.password else None
        logger.info("Connecting to %s", self.uri)
        self._driver = GraphDatabase.driver(self.uri, auth=auth)
        return self

    def close(self) -> None:
        if self._driver is not None:
            self._driver.close()
            self._driver = None

    def __enter__(self) -> "Neo4jInstance":
        return self.open()

    def __exit__(self, *exc) -> None:
        self.close()

    def rows(self, query: str) -> List[Row]:
        if self._driver is None:
            raise RuntimeError(f"Neo4jInstance {self.uri} is not open")
        logger.debug("%s: %s", self.uri, query)
        with self._driver.session(database=self.database) as session:
            return session.run(query).data()


def fetch_rows(instance: Neo4jInstance, query: str) -> List[Row]:
    with instance:
        return instance.rows(query)
