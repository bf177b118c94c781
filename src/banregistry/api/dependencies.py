from __future__ import annotations

import logging

from banregistry.common.logging import setup_logging
from banregistry.config.settings import get_settings
from banregistry.services.registry import Registry, get_registry


def configure_logging() -> logging.Logger:
    settings = get_settings()
    return setup_logging(settings.logs_dir, "api.log", "banregistry")


def get_registry_dependency() -> Registry:
    return get_registry()


__all__ = ["configure_logging", "get_registry_dependency"]
