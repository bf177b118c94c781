"""
Frontière d'envoi des demandes de composition.

Le suivi de composition ne parle qu'à l'interface `CompositionQueue` : il lui
remet un `CompositionJob` typé et n'attend aucun résultat. L'implémentation RQ
pousse le job dans Redis ; les tests utilisent un double.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Optional

from rq import Queue
from rq.job import Job

from .connection import get_queue

logger = logging.getLogger(__name__)

COMPOSE_COMMUNE_FUNC = "banregistry.queue.jobs.compose_commune_job"


@dataclass(frozen=True)
class CompositionJob:
    """Demande de (re)composition d'une commune."""
    code_commune: str
    composition_asked_at: datetime


class CompositionQueue(ABC):
    """File de travail recevant les demandes de composition"""

    @abstractmethod
    def enqueue(self, job: CompositionJob) -> None:
        """Envoyer un job (fire-and-forget)"""


class RQCompositionQueue(CompositionQueue):
    def __init__(self, queue: Optional[Queue] = None):
        self._queue = queue

    @property
    def queue(self) -> Queue:
        if self._queue is None:
            self._queue = get_queue()
        return self._queue

    def enqueue(self, job: CompositionJob) -> None:
        rq_job: Job = self.queue.enqueue_call(
            func=COMPOSE_COMMUNE_FUNC,
            kwargs=asdict(job),
            description=f"Composition de la commune {job.code_commune}",
            meta={"job_type": "compose-commune", "code_commune": job.code_commune},
        )
        logger.debug(f"[QUEUE] Composition {job.code_commune} envoyée (job {rq_job.id})")


__all__ = [
    "COMPOSE_COMMUNE_FUNC",
    "CompositionJob",
    "CompositionQueue",
    "RQCompositionQueue",
]
