"""
Vues dénormalisées exposées aux consommateurs (API, exports).

Chaque vue est construite champ par champ à partir d'une projection à liste
blanche : un champ absent en base reste à None et disparaît avec
`model_dump(exclude_none=True)`.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ViewModel(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


# ===================================
# RÉFÉRENCES
# ===================================

class GeoRef(ViewModel):
    """Département ou région : code + nom."""
    code: str
    nom: Optional[str] = None


class CommuneRef(ViewModel):
    """Commune résolue via le référentiel COG."""
    id: str
    code: str
    nom: Optional[str] = None
    departement: Optional[GeoRef] = None
    region: Optional[GeoRef] = None


class VoieRef(ViewModel):
    id: str
    idVoie: str
    nomVoie: Optional[str] = None


# ===================================
# VUE COMMUNE
# ===================================

class VoieSummary(ViewModel):
    id: str
    idVoie: str
    type: Optional[str] = None
    nomVoie: Optional[str] = None
    sourceNomVoie: Optional[str] = None
    sources: Optional[List[str]] = None
    nbNumeros: Optional[int] = None
    nbNumerosCertifies: Optional[int] = None


class CommuneView(ViewModel):
    id: str
    type: Literal["commune"] = "commune"
    codeCommune: str
    nomCommune: Optional[str] = None
    departement: Optional[GeoRef] = None
    region: Optional[GeoRef] = None
    codesPostaux: Optional[List[str]] = None
    population: Optional[int] = None
    typeCommune: Optional[str] = None
    nbNumeros: Optional[int] = None
    nbNumerosCertifies: Optional[int] = None
    nbVoies: Optional[int] = None
    nbLieuxDits: Optional[int] = None
    typeComposition: Optional[str] = None
    displayBBox: Optional[List[float]] = None
    voies: List[VoieSummary] = Field(default_factory=list)


# ===================================
# VUE VOIE
# ===================================

class NumeroSummary(ViewModel):
    id: str
    numero: Optional[int] = None
    suffixe: Optional[str] = None
    lieuDitComplementNom: Optional[str] = None
    parcelles: Optional[List[str]] = None
    sources: Optional[List[str]] = None
    position: Optional[Dict[str, Any]] = None
    positionType: Optional[str] = None
    sourcePosition: Optional[str] = None
    certifie: Optional[bool] = None
    codePostal: Optional[str] = None
    libelleAcheminement: Optional[str] = None


class VoieView(ViewModel):
    id: str
    idVoie: str
    type: Optional[str] = None
    nomVoie: Optional[str] = None
    sourceNomVoie: Optional[str] = None
    sources: Optional[List[str]] = None
    nbNumeros: Optional[int] = None
    nbNumerosCertifies: Optional[int] = None
    displayBBox: Optional[List[float]] = None
    commune: CommuneRef
    numeros: List[NumeroSummary] = Field(default_factory=list)


# ===================================
# VUE NUMÉRO
# ===================================

class NumeroView(ViewModel):
    type: Literal["numero"] = "numero"
    id: str
    numero: Optional[int] = None
    suffixe: Optional[str] = None
    lieuDitComplementNom: Optional[str] = None
    parcelles: Optional[List[str]] = None
    sources: Optional[List[str]] = None
    position: Optional[Dict[str, Any]] = None
    positionType: Optional[str] = None
    sourcePosition: Optional[str] = None
    certifie: Optional[bool] = None
    codePostal: Optional[str] = None
    libelleAcheminement: Optional[str] = None
    cleInterop: Optional[str] = None
    tiles: Optional[List[str]] = None
    adressesOriginales: Optional[List[Dict[str, Any]]] = None
    voie: Optional[VoieRef] = None
    commune: CommuneRef


# ===================================
# RÉSUMÉ DES COMMUNES
# ===================================

class CommuneSummary(ViewModel):
    codeCommune: str
    nomCommune: Optional[str] = None
    departement: Optional[str] = None
    region: Optional[str] = None
    nbLieuxDits: Optional[int] = None
    nbNumeros: Optional[int] = None
    nbNumerosCertifies: Optional[int] = None
    nbVoies: Optional[int] = None
    population: Optional[int] = None
    typeComposition: Optional[str] = None
    analyseAdressage: Optional[Dict[str, Any]] = None
