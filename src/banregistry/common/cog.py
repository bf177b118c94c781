"""
Référentiel géographique (Code Officiel Géographique).

Charge les fichiers communes.json, departements.json et regions.json au format
decoupage-administratif et répond aux recherches par code, y compris la
résolution d'un code historique (commune fusionnée, déléguée ou associée) vers
la commune actuelle qui lui succède.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from banregistry.config.settings import get_settings

from .interfaces.reference_resolver import ReferenceResolver

logger = logging.getLogger(__name__)

LIVE_COMMUNE_TYPES = ("commune-actuelle", "arrondissement-municipal")


def _load_json(path: Path) -> List[Dict[str, Any]]:
    with path.open(encoding="utf-8") as f:
        return json.load(f)


class CogReferenceResolver(ReferenceResolver):
    """Résolveur COG en mémoire."""

    def __init__(
        self,
        communes: Iterable[Dict[str, Any]],
        departements: Iterable[Dict[str, Any]],
        regions: Iterable[Dict[str, Any]],
    ):
        self._live: Dict[str, Dict[str, Any]] = {}
        self._others: Dict[str, Dict[str, Any]] = {}
        self._anciens_codes: Dict[str, Dict[str, Any]] = {}

        for commune in communes:
            if commune.get("type", "commune-actuelle") in LIVE_COMMUNE_TYPES:
                self._live[commune["code"]] = commune
            else:
                # Une commune déléguée partage souvent le code de son chef-lieu
                self._others.setdefault(commune["code"], commune)

        for commune in self._live.values():
            for ancien_code in commune.get("anciensCodes") or []:
                if ancien_code not in self._live:
                    self._anciens_codes[ancien_code] = commune

        self._departements = {d["code"]: d for d in departements}
        self._regions = {r["code"]: r for r in regions}

        logger.debug(
            f"[COG] {len(self._live)} communes actuelles, {len(self._others)} communes "
            f"déléguées/associées, {len(self._anciens_codes)} anciens codes"
        )

    @classmethod
    def from_directory(cls, cog_dir: Path) -> "CogReferenceResolver":
        cog_dir = Path(cog_dir)
        return cls(
            communes=_load_json(cog_dir / "communes.json"),
            departements=_load_json(cog_dir / "departements.json"),
            regions=_load_json(cog_dir / "regions.json"),
        )

    def resolve_current_commune(self, code: str) -> Optional[Dict[str, Any]]:
        if code in self._live:
            return self._live[code]

        other = self._others.get(code)
        if other and other.get("chefLieu"):
            return self._live.get(other["chefLieu"])

        return self._anciens_codes.get(code)

    def resolve_commune(self, code: str) -> Optional[Dict[str, Any]]:
        return self._live.get(code) or self._others.get(code)

    def resolve_departement(self, code: str) -> Optional[Dict[str, Any]]:
        return self._departements.get(code)

    def resolve_region(self, code: str) -> Optional[Dict[str, Any]]:
        return self._regions.get(code)


@lru_cache(maxsize=1)
def get_reference_resolver() -> CogReferenceResolver:
    """Return the catalog loaded from the configured COG directory."""
    return CogReferenceResolver.from_directory(get_settings().cog_dir)


__all__ = ["CogReferenceResolver", "get_reference_resolver"]
