from __future__ import annotations

from fastapi import FastAPI

from banregistry.api.dependencies import configure_logging
from banregistry.api.routers import communes, composition, tiles


def create_app() -> FastAPI:
    logger = configure_logging()

    app = FastAPI(
        title="Registre d'adresses",
        description="Communes, voies et numéros dénormalisés ; suivi des compositions.",
        version="1.0.0",
    )

    app.include_router(communes.router)
    app.include_router(composition.router)
    app.include_router(tiles.router)

    logger.info("✅ API registre d'adresses initialisée")
    return app


__all__ = ["create_app"]
