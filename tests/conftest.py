from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable, Dict
from unittest.mock import MagicMock

import mongomock
import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from banregistry.common.cog import CogReferenceResolver  # noqa: E402
from banregistry.queue.dispatcher import CompositionQueue  # noqa: E402
from banregistry.services.registry import Registry, build_registry  # noqa: E402


COG_COMMUNES = [
    {"code": "01001", "nom": "L'Abergement-Clémenciat", "type": "commune-actuelle", "departement": "01", "region": "84"},
    {"code": "01004", "nom": "Ambérieu-en-Bugey", "type": "commune-actuelle", "departement": "01", "region": "84"},
    {
        "code": "49092",
        "nom": "Chemillé-en-Anjou",
        "type": "commune-actuelle",
        "departement": "49",
        "region": "52",
        "anciensCodes": ["49244", "49092"],
    },
    {"code": "49101", "nom": "Cossé-d'Anjou", "type": "commune-deleguee", "chefLieu": "49092", "departement": "49", "region": "52"},
    {"code": "75056", "nom": "Paris", "type": "commune-actuelle", "departement": "75", "region": "11"},
    {"code": "75101", "nom": "Paris 1er Arrondissement", "type": "arrondissement-municipal", "commune": "75056", "departement": "75", "region": "11"},
]

COG_DEPARTEMENTS = [
    {"code": "01", "nom": "Ain", "region": "84"},
    {"code": "49", "nom": "Maine-et-Loire", "region": "52"},
    {"code": "75", "nom": "Paris", "region": "11"},
]

COG_REGIONS = [
    {"code": "84", "nom": "Auvergne-Rhône-Alpes"},
    {"code": "52", "nom": "Pays de la Loire"},
    {"code": "11", "nom": "Île-de-France"},
]


@pytest.fixture
def cog_resolver() -> CogReferenceResolver:
    """Référentiel COG réduit à quelques communes représentatives."""
    return CogReferenceResolver(COG_COMMUNES, COG_DEPARTEMENTS, COG_REGIONS)


@pytest.fixture
def db():
    """Base MongoDB en mémoire, vierge pour chaque test."""
    return mongomock.MongoClient()["ban_test"]


@pytest.fixture
def composition_queue() -> MagicMock:
    """Double de la file de composition (aucun Redis requis)."""
    return MagicMock(spec=CompositionQueue)


@pytest.fixture
def registry(db, cog_resolver, composition_queue) -> Registry:
    return build_registry(db, cog_resolver, composition_queue, max_workers=4)


@pytest.fixture
def voie_factory() -> Callable[..., Dict[str, Any]]:
    def make_voie(id_voie: str, code_commune: str = "01001", **fields: Any) -> Dict[str, Any]:
        voie = {
            "idVoie": id_voie,
            "codeCommune": code_commune,
            "nomVoie": f"Rue {id_voie}",
            "sourceNomVoie": "bal",
            "type": "voie",
            "sources": ["bal"],
            "nbNumeros": 0,
            "nbNumerosCertifies": 0,
            "displayBBox": [4.90, 46.14, 4.93, 46.16],
            "tiles": [],
        }
        voie.update(fields)
        return voie

    return make_voie


@pytest.fixture
def numero_factory() -> Callable[..., Dict[str, Any]]:
    def make_numero(id_voie: str, numero: int, code_commune: str = "01001", suffixe=None, **fields: Any) -> Dict[str, Any]:
        cle = f"{id_voie}_{numero:05d}" + (f"_{suffixe}" if suffixe else "")
        doc = {
            "id": cle,
            "codeCommune": code_commune,
            "idVoie": id_voie,
            "numero": numero,
            "suffixe": suffixe,
            "position": {"type": "Point", "coordinates": [4.92, 46.15]},
            "positionType": "entrée",
            "sourcePosition": "bal",
            "parcelles": ["01001000AB0012"],
            "sources": ["bal"],
            "certifie": False,
            "codePostal": "01400",
            "libelleAcheminement": "L ABERGEMENT CLEMENCIAT",
            "lieuDitComplementNom": None,
            "cleInterop": cle,
            "tiles": [],
            "adressesOriginales": [{"source": "bal", "numero": str(numero)}],
        }
        doc.update(fields)
        return doc

    return make_numero
