from .commune_data import CommuneDataSaveReport, CommuneDataStore
from .composition import CompositionTracker
from .force_certification import ForceCertificationReconciler, ForceCertificationResult
from .registry import Registry, build_registry, get_registry
from .tiles import TileFeatureExtractor, tile_key
from .views import ViewBuilder

__all__ = [
    "CommuneDataSaveReport",
    "CommuneDataStore",
    "CompositionTracker",
    "ForceCertificationReconciler",
    "ForceCertificationResult",
    "Registry",
    "build_registry",
    "get_registry",
    "TileFeatureExtractor",
    "tile_key",
    "ViewBuilder",
]
