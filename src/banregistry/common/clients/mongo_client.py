"""
Client MongoDB partagé.

La connexion est créée paresseusement et mise en cache ; les services la
reçoivent par injection (paramètre `db`) au lieu de lire un état global.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Dict, Iterable

from pymongo import ASCENDING, MongoClient
from pymongo.database import Database

from banregistry.config.settings import get_settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_mongo_client() -> MongoClient:
    """Return a lazily instantiated MongoDB client."""
    return MongoClient(get_settings().mongodb_url, tz_aware=True)


def get_database() -> Database:
    """Return the registry database configured in settings."""
    return get_mongo_client()[get_settings().mongodb_dbname]


def fields_to_projection(fields: Iterable[str]) -> Dict[str, int]:
    """Transforme une liste blanche de champs en projection Mongo (sans `_id`)."""
    projection = {"_id": 0}
    for field in fields:
        projection[field] = 1
    return projection


def ensure_indexes(db: Database) -> None:
    """Crée les index utilisés par le suivi de composition, les vues et les tuiles."""
    db.communes.create_index([("codeCommune", ASCENDING)], unique=True)
    db.communes.create_index([("compositionAskedAt", ASCENDING)], sparse=True)
    db.communes.create_index([("forceCertification", ASCENDING)], sparse=True)

    db.voies.create_index([("idVoie", ASCENDING)], unique=True)
    db.voies.create_index([("codeCommune", ASCENDING)])
    db.voies.create_index([("tiles", ASCENDING)])

    db.numeros.create_index([("id", ASCENDING)], unique=True)
    db.numeros.create_index([("codeCommune", ASCENDING)])
    db.numeros.create_index([("idVoie", ASCENDING), ("cleInterop", ASCENDING)])
    db.numeros.create_index([("tiles", ASCENDING)])

    logger.info(f"[MONGO] Index vérifiés sur la base {db.name}")


__all__ = [
    "get_mongo_client",
    "get_database",
    "fields_to_projection",
    "ensure_indexes",
]
