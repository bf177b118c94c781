"""Assemblage des services autour d'une base, d'un référentiel et d'une file."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from pymongo.database import Database

from banregistry.common.clients.mongo_client import get_database
from banregistry.common.cog import get_reference_resolver
from banregistry.common.interfaces.reference_resolver import ReferenceResolver
from banregistry.config.settings import get_settings
from banregistry.queue.dispatcher import CompositionQueue, RQCompositionQueue

from .commune_data import CommuneDataStore
from .composition import CompositionTracker
from .force_certification import ForceCertificationReconciler
from .tiles import TileFeatureExtractor
from .views import ViewBuilder


@dataclass
class Registry:
    composition: CompositionTracker
    force_certification: ForceCertificationReconciler
    commune_data: CommuneDataStore
    views: ViewBuilder
    tiles: TileFeatureExtractor


def build_registry(
    db: Database,
    resolver: ReferenceResolver,
    queue: CompositionQueue,
    max_workers: Optional[int] = None,
) -> Registry:
    tracker = CompositionTracker(db, resolver, queue)
    return Registry(
        composition=tracker,
        force_certification=ForceCertificationReconciler(tracker, max_workers=max_workers or 8),
        commune_data=CommuneDataStore(db, tracker),
        views=ViewBuilder(db, resolver),
        tiles=TileFeatureExtractor(db),
    )


@lru_cache(maxsize=1)
def get_registry() -> Registry:
    """Return the registry wired on the configured MongoDB, COG and RQ queue."""
    return build_registry(
        db=get_database(),
        resolver=get_reference_resolver(),
        queue=RQCompositionQueue(),
        max_workers=get_settings().max_workers,
    )


__all__ = ["Registry", "build_registry", "get_registry"]
