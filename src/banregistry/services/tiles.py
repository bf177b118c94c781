"""
Extraction des features d'une tuile z/x/y.

Les numéros et voies portent dans `tiles` la liste des clés de tuiles qu'ils
intersectent ; une tuile est donc servie par deux requêtes indexées.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List

from pymongo.database import Database

from banregistry.common.errors import InvalidTileError
from banregistry.formatters.geojson import format_address_feature, format_toponym_feature

logger = logging.getLogger(__name__)

MAX_ZOOM = 24

Feature = Dict[str, Any]


def tile_key(z: int, x: int, y: int) -> str:
    """Valide les coordonnées et renvoie la clé "z/x/y"."""
    for name, value in (("z", z), ("x", x), ("y", y)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidTileError(f"Coordonnée de tuile {name} non entière: {value!r}")

    if not 0 <= z <= MAX_ZOOM:
        raise InvalidTileError(f"Niveau de zoom hors bornes: {z}")

    size = 2 ** z
    if not (0 <= x < size and 0 <= y < size):
        raise InvalidTileError(f"Tuile {z}/{x}/{y} hors de la grille")

    return f"{z}/{x}/{y}"


class TileFeatureExtractor:
    def __init__(
        self,
        db: Database,
        address_formatter: Callable[[Dict[str, Any], Dict[str, Any]], Feature] = format_address_feature,
        toponym_formatter: Callable[[Dict[str, Any]], Feature] = format_toponym_feature,
    ):
        self.db = db
        self.address_formatter = address_formatter
        self.toponym_formatter = toponym_formatter

    def get_adresses_features(self, z: int, x: int, y: int) -> List[Feature]:
        key = tile_key(z, x, y)
        numeros = list(self.db.numeros.find({"tiles": key}, {"_id": 0, "adressesOriginales": 0}))

        ids_voies = list(dict.fromkeys(numero["idVoie"] for numero in numeros))
        voies = self.db.voies.find({"idVoie": {"$in": ids_voies}}, {"_id": 0})
        voies_index = {voie["idVoie"]: voie for voie in voies}

        features = []
        orphans = 0
        for numero in numeros:
            voie = voies_index.get(numero["idVoie"])
            if voie is None:
                orphans += 1
                continue
            features.append(self.address_formatter(numero, voie))

        if orphans:
            logger.warning(f"[TILES] {key}: {orphans} numéro(s) ignoré(s), voie introuvable")

        return features

    def get_toponymes_features(self, z: int, x: int, y: int) -> List[Feature]:
        key = tile_key(z, x, y)
        voies = self.db.voies.find({"tiles": key}, {"_id": 0})
        return [self.toponym_formatter(voie) for voie in voies]

    def get_tile_features(self, z: int, x: int, y: int) -> Dict[str, List[Feature]]:
        return {
            "adresses": self.get_adresses_features(z, x, y),
            "toponymes": self.get_toponymes_features(z, x, y),
        }


__all__ = ["MAX_ZOOM", "TileFeatureExtractor", "tile_key"]
