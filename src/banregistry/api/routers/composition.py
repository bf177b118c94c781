from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, status

from banregistry.api.dependencies import get_registry_dependency
from banregistry.common.errors import UnresolvableCommuneError
from banregistry.services.registry import Registry

router = APIRouter(tags=["composition"])


@router.post("/communes/{code_commune}/compose", status_code=status.HTTP_202_ACCEPTED)
def ask_composition(code_commune: str, registry: Registry = Depends(get_registry_dependency)) -> Dict[str, Any]:
    try:
        job = registry.composition.ask_composition(code_commune)
    except UnresolvableCommuneError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return {
        "codeCommune": job.code_commune,
        "compositionAskedAt": job.composition_asked_at.isoformat(),
    }


@router.get("/composition/pending")
def get_asked_composition(registry: Registry = Depends(get_registry_dependency)) -> List[str]:
    return sorted(registry.composition.get_asked_composition())


@router.put("/force-certification")
def update_force_certification(
    codes: List[str] = Body(...),
    registry: Registry = Depends(get_registry_dependency),
) -> Dict[str, Any]:
    result = registry.force_certification.update_communes_force_certification(codes)
    return {
        "communesAdded": result.communes_added,
        "communesRemoved": result.communes_removed,
        "compositionErrors": {code: str(error) for code, error in result.composition_errors.items()},
    }


__all__ = ["router"]
