"""
Worker RQ des compositions de communes.

Au démarrage, le worker vérifie Redis et charge le registre (base, COG) une
seule fois : un COG manquant fait échouer le lancement plutôt que chaque job.
Avec `requeue=True`, les communes restées en attente sont renvoyées dans la
file avant de commencer à consommer.
"""

from __future__ import annotations

import logging

from rq import Worker

from banregistry.common.logging import setup_logging
from banregistry.config.settings import get_settings

from .connection import check_redis_connection, get_queue, get_redis_connection


def run_worker(*, queue_name: str | None = None, requeue: bool = False, with_scheduler: bool = False) -> None:
    from banregistry.services.registry import get_registry

    settings = get_settings()
    logger = setup_logging(settings.logs_dir, "worker.log")

    check_redis_connection()
    registry = get_registry()

    queue = get_queue(queue_name)
    if requeue:
        registry.composition.requeue_asked_compositions()

    logger.info(f"[WORKER] Démarrage sur la file '{queue.name}'")
    worker = Worker([queue], connection=get_redis_connection())
    worker.work(with_scheduler=with_scheduler, logging_level=logging.DEBUG if settings.debug_mode else logging.INFO)


def main() -> None:
    run_worker(requeue=True)


__all__ = ["main", "run_worker"]
