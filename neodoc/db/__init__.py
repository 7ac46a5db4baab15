from .neo4j_instance import Neo4jInstance, fetch_rows

__all__ = ["Neo4jInstance", "fetch_rows"]
