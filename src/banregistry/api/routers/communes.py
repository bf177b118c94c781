from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, status

from banregistry.api.dependencies import get_registry_dependency
from banregistry.services.registry import Registry

router = APIRouter(tags=["communes"])


@router.get("/communes")
def list_communes(registry: Registry = Depends(get_registry_dependency)) -> List[Dict[str, Any]]:
    """Résumé de toutes les communes, trié par code."""
    return [summary.to_dict() for summary in registry.views.get_communes_summary()]


@router.get("/communes/{code_commune}")
def get_commune(code_commune: str, registry: Registry = Depends(get_registry_dependency)) -> Dict[str, Any]:
    commune = registry.views.get_populated_commune(code_commune)
    if commune is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Commune {code_commune} inconnue")
    return commune.to_dict()


@router.get("/voies/{id_voie}")
def get_voie(id_voie: str, registry: Registry = Depends(get_registry_dependency)) -> Dict[str, Any]:
    voie = registry.views.get_populated_voie(id_voie)
    if voie is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Voie {id_voie} inconnue")
    return voie.to_dict()


@router.get("/numeros/{id_numero}")
def get_numero(id_numero: str, registry: Registry = Depends(get_registry_dependency)) -> Dict[str, Any]:
    numero = registry.views.get_populated_numero(id_numero)
    if numero is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Numéro {id_numero} inconnu")
    return numero.to_dict()


__all__ = ["router"]
