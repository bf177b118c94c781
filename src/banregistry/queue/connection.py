"""
Connexion Redis et file RQ des compositions.

Les paramètres (URL, nom de file, timeout) viennent de `Settings` ; la
connexion est partagée par le dispatcher (API, CLI) et le worker.
"""

from __future__ import annotations

import logging
from functools import lru_cache

import redis
from rq import Queue

from banregistry.config.settings import get_settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_redis_connection() -> redis.Redis:
    settings = get_settings()
    logger.debug(f"[QUEUE] Connexion Redis {settings.redis_url}")
    return redis.from_url(settings.redis_url)


def check_redis_connection() -> None:
    """Vérifie que Redis répond ; laisse remonter `redis.ConnectionError` sinon."""
    get_redis_connection().ping()


def get_queue(name: str | None = None, *, timeout: int | None = None) -> Queue:
    """File des jobs de composition (nom et timeout par défaut issus des settings)."""
    settings = get_settings()
    return Queue(
        name or settings.composition_queue,
        connection=get_redis_connection(),
        default_timeout=timeout or settings.composition_job_timeout,
    )


__all__ = ["check_redis_connection", "get_queue", "get_redis_connection"]
