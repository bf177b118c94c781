from .connection import get_queue, get_redis_connection
from .dispatcher import (
    COMPOSE_COMMUNE_FUNC,
    CompositionJob,
    CompositionQueue,
    RQCompositionQueue,
)

__all__ = [
    "COMPOSE_COMMUNE_FUNC",
    "CompositionJob",
    "CompositionQueue",
    "RQCompositionQueue",
    "get_queue",
    "get_redis_connection",
]
