"""
Remplacement en bloc des voies et numéros d'une commune.

Seule voie d'écriture des données d'adresse, appelée après chaque composition.
Entre la suppression des anciennes lignes et l'insertion des nouvelles, un
lecteur concurrent peut voir une commune vide ou partiellement remplie : il n'y
a pas de transaction entre collections.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import BulkWriteError

from .composition import CompositionTracker

logger = logging.getLogger(__name__)


@dataclass
class CommuneDataSaveReport:
    code_commune: str
    voies_inserted: int = 0
    numeros_inserted: int = 0
    voies_errors: List[Dict[str, Any]] = field(default_factory=list)
    numeros_errors: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.voies_errors or self.numeros_errors)


class CommuneDataStore:
    def __init__(self, db: Database, tracker: CompositionTracker):
        self.db = db
        self.tracker = tracker

    def save_commune_data(
        self,
        code_commune: str,
        commune: Optional[Dict[str, Any]] = None,
        voies: Optional[List[Dict[str, Any]]] = None,
        numeros: Optional[List[Dict[str, Any]]] = None,
    ) -> CommuneDataSaveReport:
        with ThreadPoolExecutor(max_workers=2) as executor:
            deletions = [
                executor.submit(self.db.voies.delete_many, {"codeCommune": code_commune}),
                executor.submit(self.db.numeros.delete_many, {"codeCommune": code_commune}),
            ]
            for future in deletions:
                future.result()

        # Le document commune existe dès la première sauvegarde, même sans champs
        self.tracker.update_commune(code_commune, {**(commune or {}), "codeCommune": code_commune}, upsert=True)

        report = CommuneDataSaveReport(code_commune=code_commune)

        if voies:
            report.voies_inserted, report.voies_errors = self._insert_unordered(self.db.voies, voies)

        if numeros:
            report.numeros_inserted, report.numeros_errors = self._insert_unordered(self.db.numeros, numeros)

        if report.has_errors:
            logger.warning(
                f"[COMMUNE-DATA] {code_commune}: {len(report.voies_errors)} voie(s) et "
                f"{len(report.numeros_errors)} numéro(s) rejeté(s) à l'insertion"
            )

        logger.info(
            f"[COMMUNE-DATA] {code_commune}: {report.voies_inserted} voies, "
            f"{report.numeros_inserted} numéros enregistrés"
        )
        return report

    @staticmethod
    def _insert_unordered(collection: Collection, documents: List[Dict[str, Any]]):
        # Copie : le driver ajoute `_id` aux documents insérés
        documents = [dict(document) for document in documents]
        try:
            result = collection.insert_many(documents, ordered=False)
            return len(result.inserted_ids), []
        except BulkWriteError as e:
            return e.details.get("nInserted", 0), e.details.get("writeErrors", [])

    def get_commune_data(self, code_commune: str) -> Dict[str, List[Dict[str, Any]]]:
        with ThreadPoolExecutor(max_workers=2) as executor:
            voies = executor.submit(
                lambda: list(self.db.voies.find({"codeCommune": code_commune}, {"_id": 0}))
            )
            numeros = executor.submit(
                lambda: list(self.db.numeros.find({"codeCommune": code_commune}, {"_id": 0}))
            )
            return {"voies": voies.result(), "numeros": numeros.result()}


__all__ = ["CommuneDataSaveReport", "CommuneDataStore"]
