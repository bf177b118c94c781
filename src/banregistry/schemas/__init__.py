from .views import (
    CommuneRef,
    CommuneSummary,
    CommuneView,
    GeoRef,
    NumeroSummary,
    NumeroView,
    VoieRef,
    VoieSummary,
    VoieView,
)

__all__ = [
    "CommuneRef",
    "CommuneSummary",
    "CommuneView",
    "GeoRef",
    "NumeroSummary",
    "NumeroView",
    "VoieRef",
    "VoieSummary",
    "VoieView",
]
