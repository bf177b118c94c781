"""Mise en forme GeoJSON des numéros et voies pour les tuiles vectorielles."""

from typing import Any, Dict, List, Optional

ADRESSE_PROPERTIES = [
    "id",
    "numero",
    "suffixe",
    "lieuDitComplementNom",
    "parcelles",
    "sources",
    "certifie",
    "codePostal",
    "libelleAcheminement",
    "codeCommune",
    "idVoie",
    "positionType",
    "sourcePosition",
]

TOPONYME_PROPERTIES = ["type", "nomVoie", "sources", "nbNumeros", "nbNumerosCertifies", "codeCommune"]


def _bbox_center(bbox: Optional[List[float]]) -> Optional[Dict[str, Any]]:
    if not bbox or len(bbox) != 4:
        return None
    min_x, min_y, max_x, max_y = bbox
    return {"type": "Point", "coordinates": [(min_x + max_x) / 2, (min_y + max_y) / 2]}


def format_address_feature(numero: Dict[str, Any], voie: Dict[str, Any]) -> Dict[str, Any]:
    properties = {key: numero[key] for key in ADRESSE_PROPERTIES if numero.get(key) is not None}
    properties["nomVoie"] = voie.get("nomVoie")

    return {
        "type": "Feature",
        "geometry": numero.get("position"),
        "properties": properties,
    }


def format_toponym_feature(voie: Dict[str, Any]) -> Dict[str, Any]:
    properties = {key: voie[key] for key in TOPONYME_PROPERTIES if voie.get(key) is not None}
    properties["id"] = voie["idVoie"]

    return {
        "type": "Feature",
        "geometry": _bbox_center(voie.get("displayBBox")),
        "properties": properties,
    }


__all__ = ["format_address_feature", "format_toponym_feature"]
