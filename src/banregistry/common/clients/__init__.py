from .mongo_client import ensure_indexes, fields_to_projection, get_database, get_mongo_client

__all__ = [
    "ensure_indexes",
    "fields_to_projection",
    "get_database",
    "get_mongo_client",
]
