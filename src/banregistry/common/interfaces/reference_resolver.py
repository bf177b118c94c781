"""
Interface ReferenceResolver - Abstraction du référentiel géographique (COG)
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class ReferenceResolver(ABC):
    """Interface abstraite des recherches dans le Code Officiel Géographique.

    Les entrées renvoyées sont des dictionnaires au format decoupage-administratif
    (`code`, `nom`, `type`, `departement`, `region`, ...).
    """

    @abstractmethod
    def resolve_current_commune(self, code: str) -> Optional[Dict[str, Any]]:
        """Commune actuelle correspondant à un code éventuellement historique"""

    @abstractmethod
    def resolve_commune(self, code: str) -> Optional[Dict[str, Any]]:
        """Commune (actuelle ou non) portant exactement ce code"""

    @abstractmethod
    def resolve_departement(self, code: str) -> Optional[Dict[str, Any]]:
        """Département par code"""

    @abstractmethod
    def resolve_region(self, code: str) -> Optional[Dict[str, Any]]:
        """Région par code"""
