"""
Job RQ de composition d'une commune.

Le calcul lui-même est délégué à la fonction désignée par la variable COMPOSER
(chemin "module:fonction"), qui reçoit un code commune et renvoie
`{"commune": {...}, "voies": [...], "numeros": [...]}`.
"""

from __future__ import annotations

import importlib
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from banregistry.common.errors import ComposerNotConfiguredError
from banregistry.config.settings import get_settings

logger = logging.getLogger(__name__)

Composer = Callable[[str], Dict[str, Any]]


def load_composer(path: Optional[str]) -> Composer:
    if not path:
        raise ComposerNotConfiguredError("Variable COMPOSER non renseignée")

    if ":" in path:
        module_name, attr = path.split(":", 1)
    else:
        module_name, _, attr = path.rpartition(".")

    module = importlib.import_module(module_name)
    return getattr(module, attr)


def _as_utc_millis(value: datetime) -> datetime:
    # MongoDB ne conserve que la milliseconde et peut renvoyer des dates naïves (UTC)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def is_current_request(asked_at: Optional[datetime], job_asked_at: datetime) -> bool:
    return asked_at is not None and _as_utc_millis(asked_at) == _as_utc_millis(job_asked_at)


def compose_commune_job(
    code_commune: str,
    composition_asked_at: datetime,
    *,
    registry=None,
    composer: Optional[Composer] = None,
) -> str:
    if registry is None:
        from banregistry.services.registry import get_registry
        registry = get_registry()

    commune = registry.composition.get_commune(code_commune)
    asked_at = commune.get("compositionAskedAt") if commune else None

    if not is_current_request(asked_at, composition_asked_at):
        logger.info(f"[COMPOSE] {code_commune}: demande obsolète ou déjà traitée, job ignoré")
        return "skipped"

    if composer is None:
        composer = load_composer(get_settings().composer)

    logger.info(f"[COMPOSE] Composition de {code_commune}")
    data = composer(code_commune)

    report = registry.commune_data.save_commune_data(
        code_commune,
        commune=data.get("commune"),
        voies=data.get("voies"),
        numeros=data.get("numeros"),
    )

    # Une nouvelle demande reçue pendant le calcul garde la commune en attente
    asked_at = _as_utc_millis(composition_asked_at)
    if not registry.composition.finish_composition(code_commune, asked_at=asked_at):
        logger.info(f"[COMPOSE] {code_commune}: nouvelle demande reçue pendant la composition")

    logger.info(
        f"[COMPOSE] ✅ {code_commune}: {report.voies_inserted} voies, {report.numeros_inserted} numéros"
    )
    return "composed"


__all__ = ["compose_commune_job", "is_current_request", "load_composer"]
