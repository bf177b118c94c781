from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, status

from banregistry.api.dependencies import get_registry_dependency
from banregistry.common.errors import InvalidTileError
from banregistry.services.registry import Registry

router = APIRouter(tags=["tiles"])


@router.get("/tiles/{z}/{x}/{y}")
def get_tile(
    z: int,
    x: int,
    y: int,
    registry: Registry = Depends(get_registry_dependency),
) -> Dict[str, List[Dict[str, Any]]]:
    """Features adresses et toponymes de la tuile z/x/y."""
    try:
        return registry.tiles.get_tile_features(z, x, y)
    except InvalidTileError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


__all__ = ["router"]
