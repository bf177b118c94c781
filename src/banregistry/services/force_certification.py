"""
Réconciliation de l'ensemble des communes en certification forcée.

On reçoit la liste cible complète (pas un delta), on compare avec les communes
actuellement marquées, on bascule le drapeau sur la différence et on redemande
la composition de chaque commune modifiée.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from pymongo import UpdateOne

from .composition import CompositionTracker

logger = logging.getLogger(__name__)


@dataclass
class ForceCertificationResult:
    """Résultat d'une réconciliation"""
    communes_added: List[str]
    communes_removed: List[str]
    composition_errors: Dict[str, Exception] = field(default_factory=dict)

    @property
    def changed(self) -> List[str]:
        return sorted(self.communes_added + self.communes_removed)


class ForceCertificationReconciler:
    def __init__(self, tracker: CompositionTracker, max_workers: int = 8):
        self.tracker = tracker
        self.max_workers = max_workers

    @property
    def communes(self):
        return self.tracker.communes

    def get_force_certification_list(self) -> List[str]:
        return self.communes.distinct("codeCommune", {"forceCertification": True})

    def update_communes_force_certification(self, force_certification_list: Iterable[str]) -> ForceCertificationResult:
        desired = set(force_certification_list)
        current = set(self.get_force_certification_list())

        to_remove = sorted(current - desired)
        to_add = sorted(desired - current)

        if to_remove:
            self.communes.update_many(
                {"codeCommune": {"$in": to_remove}},
                {"$set": {"forceCertification": False}},
            )

        if to_add:
            # Upsert : une commune encore absente de la base est créée déjà marquée
            update = self.communes.bulk_write([
                UpdateOne({"codeCommune": code}, {"$set": {"forceCertification": True}}, upsert=True)
                for code in to_add
            ])
            if update.upserted_count:
                logger.info(f"[FORCE-CERTIF] {update.upserted_count} commune(s) créée(s) en base")

        logger.info(f"[FORCE-CERTIF] +{len(to_add)} / -{len(to_remove)} commune(s)")

        result = ForceCertificationResult(communes_added=to_add, communes_removed=to_remove)
        result.composition_errors = self._ask_compositions(result.changed)
        return result

    def _ask_compositions(self, codes: List[str]) -> Dict[str, Exception]:
        """Demande les compositions en parallèle ; chaque échec est isolé et rapporté."""
        errors: Dict[str, Exception] = {}
        if not codes:
            return errors

        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(codes))) as executor:
            future_to_code = {
                executor.submit(self.tracker.ask_composition, code): code
                for code in codes
            }

            for future in as_completed(future_to_code):
                code = future_to_code[future]
                try:
                    future.result()
                except Exception as e:
                    errors[code] = e
                    logger.error(f"[FORCE-CERTIF] Échec de la demande de composition pour {code}: {e}")

        return errors


__all__ = ["ForceCertificationReconciler", "ForceCertificationResult"]
