"""
Suivi des demandes de composition par commune.

Une commune est "en attente de composition" tant que son document porte le
champ `compositionAskedAt`. Le champ est posé avant l'envoi du job : si l'envoi
échoue, `requeue_asked_compositions` permet de renvoyer les jobs manquants.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pymongo.database import Database

from banregistry.common.errors import UnresolvableCommuneError
from banregistry.common.interfaces.reference_resolver import ReferenceResolver
from banregistry.queue.dispatcher import CompositionJob, CompositionQueue

logger = logging.getLogger(__name__)


class CompositionTracker:
    """Machine à états "composition demandée / terminée" sur la collection communes."""

    def __init__(self, db: Database, resolver: ReferenceResolver, queue: CompositionQueue):
        self.db = db
        self.resolver = resolver
        self.queue = queue

    @property
    def communes(self):
        return self.db.communes

    def ask_composition(self, code_commune: str) -> CompositionJob:
        """
        Demande la (re)composition de la commune actuelle descendant de `code_commune`.

        Raises:
            UnresolvableCommuneError: aucune commune actuelle ne correspond au code
        """
        commune_actuelle = self.resolver.resolve_current_commune(code_commune)
        if not commune_actuelle:
            raise UnresolvableCommuneError(code_commune)

        code = commune_actuelle["code"]
        now = datetime.now(timezone.utc)
        # Précision milliseconde, comme en base
        now = now.replace(microsecond=now.microsecond // 1000 * 1000)

        self.communes.find_one_and_update(
            {"codeCommune": code},
            {"$set": {"compositionAskedAt": now}},
            upsert=True,
        )

        job = CompositionJob(code_commune=code, composition_asked_at=now)
        self.queue.enqueue(job)

        if code != code_commune:
            logger.info(f"[COMPOSITION] Composition demandée pour {code} (depuis {code_commune})")
        else:
            logger.info(f"[COMPOSITION] Composition demandée pour {code}")

        return job

    def finish_composition(self, code_commune: str, asked_at: Optional[datetime] = None) -> bool:
        """
        Retire la commune des compositions en attente.

        Avec `asked_at`, le drapeau n'est retiré que s'il porte encore ce
        timestamp : une demande arrivée entre-temps reste en attente.
        Renvoie True si le drapeau a été retiré.
        """
        query: Dict[str, Any] = {"codeCommune": code_commune, "compositionAskedAt": {"$exists": True}}
        if asked_at is not None:
            query["compositionAskedAt"] = asked_at

        previous = self.communes.find_one_and_update(query, {"$unset": {"compositionAskedAt": 1}})
        if previous is None:
            return False

        logger.debug(f"[COMPOSITION] Composition terminée pour {code_commune}")
        return True

    def get_commune(self, code_commune: str) -> Optional[Dict[str, Any]]:
        return self.communes.find_one({"codeCommune": code_commune}, {"_id": 0})

    def get_asked_composition(self) -> List[str]:
        return self.communes.distinct("codeCommune", {"compositionAskedAt": {"$exists": True}})

    def update_commune(self, code_commune: str, changes: Dict[str, Any], upsert: bool = False) -> None:
        self.communes.find_one_and_update(
            {"codeCommune": code_commune},
            {"$set": changes},
            upsert=upsert,
        )

    def requeue_asked_compositions(self) -> List[CompositionJob]:
        """
        Renvoie un job pour chaque commune encore marquée "en attente".

        Le timestamp persistant est repris tel quel pour que le worker
        reconnaisse le job comme courant.
        """
        jobs = []
        cursor = self.communes.find(
            {"compositionAskedAt": {"$exists": True}},
            {"_id": 0, "codeCommune": 1, "compositionAskedAt": 1},
        )
        for commune in cursor:
            job = CompositionJob(
                code_commune=commune["codeCommune"],
                composition_asked_at=commune["compositionAskedAt"],
            )
            self.queue.enqueue(job)
            jobs.append(job)

        logger.info(f"[COMPOSITION] {len(jobs)} composition(s) en attente renvoyée(s) dans la file")
        return jobs


__all__ = ["CompositionTracker"]
