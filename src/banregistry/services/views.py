"""
Assemblage des vues dénormalisées commune → voies → numéros.

Lecture seule. Chaque entité est lue avec une liste blanche de champs fixe,
puis enrichie avec les données du référentiel COG.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from pymongo import ASCENDING
from pymongo.database import Database

from banregistry.common.clients.mongo_client import fields_to_projection
from banregistry.common.interfaces.reference_resolver import ReferenceResolver
from banregistry.schemas.views import (
    CommuneRef,
    CommuneSummary,
    CommuneView,
    GeoRef,
    NumeroSummary,
    NumeroView,
    VoieRef,
    VoieSummary,
    VoieView,
)

logger = logging.getLogger(__name__)

COMMUNE_FIELDS = [
    "codeCommune",
    "nomCommune",
    "departement",
    "region",
    "codesPostaux",
    "population",
    "typeCommune",
    "nbNumeros",
    "nbNumerosCertifies",
    "nbVoies",
    "nbLieuxDits",
    "typeComposition",
    "displayBBox",
]

COMMUNE_SUMMARY_FIELDS = [
    "nomCommune",
    "codeCommune",
    "departement",
    "region",
    "nbLieuxDits",
    "nbNumeros",
    "nbNumerosCertifies",
    "nbVoies",
    "population",
    "typeComposition",
    "analyseAdressage",
]

COMMUNE_VOIE_FIELDS = ["type", "idVoie", "nomVoie", "sourceNomVoie", "sources", "nbNumeros", "nbNumerosCertifies"]

VOIE_FIELDS = COMMUNE_VOIE_FIELDS + ["codeCommune", "displayBBox"]

VOIE_NUMERO_FIELDS = [
    "numero",
    "suffixe",
    "lieuDitComplementNom",
    "parcelles",
    "sources",
    "position",
    "positionType",
    "sourcePosition",
    "certifie",
    "codePostal",
    "libelleAcheminement",
    "id",
]

NUMERO_FIELDS = VOIE_NUMERO_FIELDS + ["codeCommune", "idVoie", "cleInterop", "tiles", "adressesOriginales"]

NUMERO_VOIE_FIELDS = ["idVoie", "nomVoie"]


def _code_of(sub_document: Optional[Dict[str, Any]]) -> Optional[str]:
    return sub_document.get("code") if sub_document else None


class ViewBuilder:
    def __init__(self, db: Database, resolver: ReferenceResolver):
        self.db = db
        self.resolver = resolver

    def get_communes_summary(self) -> List[CommuneSummary]:
        cursor = (
            self.db.communes
            .find({}, fields_to_projection(COMMUNE_SUMMARY_FIELDS))
            .sort("codeCommune", ASCENDING)
        )
        summaries = []
        for commune in cursor:
            commune["departement"] = _code_of(commune.get("departement"))
            commune["region"] = _code_of(commune.get("region"))
            summaries.append(CommuneSummary(**commune))
        return summaries

    def get_populated_commune(self, code_commune: str) -> Optional[CommuneView]:
        commune = self.db.communes.find_one(
            {"codeCommune": code_commune},
            fields_to_projection(COMMUNE_FIELDS),
        )
        if not commune:
            return None

        voies = self.db.voies.find(
            {"codeCommune": code_commune},
            fields_to_projection(COMMUNE_VOIE_FIELDS),
        )

        return CommuneView(
            id=commune["codeCommune"],
            **commune,
            voies=[VoieSummary(id=voie["idVoie"], **voie) for voie in voies],
        )

    def get_populated_voie(self, id_voie: str) -> Optional[VoieView]:
        voie = self.db.voies.find_one({"idVoie": id_voie}, fields_to_projection(VOIE_FIELDS))
        if not voie:
            return None

        code_commune = voie.pop("codeCommune")
        numeros = (
            self.db.numeros
            .find({"idVoie": id_voie}, fields_to_projection(VOIE_NUMERO_FIELDS))
            .sort("cleInterop", ASCENDING)
        )

        return VoieView(
            id=voie["idVoie"],
            **voie,
            commune=self._commune_ref(code_commune),
            numeros=[NumeroSummary(**numero) for numero in numeros],
        )

    def get_populated_numero(self, id: str) -> Optional[NumeroView]:
        numero = self.db.numeros.find_one({"id": id}, fields_to_projection(NUMERO_FIELDS))
        if not numero:
            return None

        code_commune = numero.pop("codeCommune")
        id_voie = numero.pop("idVoie")

        voie = self.db.voies.find_one({"idVoie": id_voie}, fields_to_projection(NUMERO_VOIE_FIELDS))
        if not voie:
            logger.warning(f"[VIEWS] Voie {id_voie} introuvable pour le numéro {id}")

        return NumeroView(
            **numero,
            voie=VoieRef(id=voie["idVoie"], **voie) if voie else None,
            commune=self._commune_ref(code_commune),
        )

    def _commune_ref(self, code_commune: str) -> CommuneRef:
        """Commune enrichie depuis le COG (et non depuis la base)."""
        commune = self.resolver.resolve_commune(code_commune)
        if not commune:
            logger.warning(f"[VIEWS] Commune {code_commune} absente du référentiel COG")
            return CommuneRef(id=code_commune, code=code_commune)

        return CommuneRef(
            id=commune["code"],
            code=commune["code"],
            nom=commune.get("nom"),
            departement=self._geo_ref(self.resolver.resolve_departement, commune.get("departement")),
            region=self._geo_ref(self.resolver.resolve_region, commune.get("region")),
        )

    @staticmethod
    def _geo_ref(resolve, code: Optional[str]) -> Optional[GeoRef]:
        if not code:
            return None
        entry = resolve(code)
        if not entry:
            return GeoRef(code=code)
        return GeoRef(code=entry["code"], nom=entry.get("nom"))


__all__ = [
    "COMMUNE_FIELDS",
    "COMMUNE_SUMMARY_FIELDS",
    "COMMUNE_VOIE_FIELDS",
    "VOIE_FIELDS",
    "VOIE_NUMERO_FIELDS",
    "NUMERO_FIELDS",
    "NUMERO_VOIE_FIELDS",
    "ViewBuilder",
]
