from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .paths import COG_DIR, LOGS_DIR, PROJECT_ROOT, ensure_directories


class Settings(BaseSettings):
    """Configuration centralisee du registre d'adresses."""

    model_config = SettingsConfigDict(
        env_file=PROJECT_ROOT / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    debug_mode: bool = Field(default=False, alias="DEBUG_MODE")

    # === Base documentaire (MongoDB) ===
    mongodb_url: str = Field(default="mongodb://localhost:27017", alias="MONGODB_URL")
    mongodb_dbname: str = Field(default="ban", alias="MONGODB_DBNAME")

    # === File de composition (Redis / RQ) ===
    redis_url: str = Field(default="redis://localhost:6379/0", alias="REDIS_URL")
    composition_queue: str = Field(default="compose-commune", alias="COMPOSITION_QUEUE")
    composition_job_timeout: int = Field(default=3600, alias="COMPOSITION_JOB_TIMEOUT")

    # Chemin pointé vers la fonction de composition (ex: "ban_compose.compose:compose_commune")
    composer: Optional[str] = Field(default=None, alias="COMPOSER")

    # Parallélisme des opérations indépendantes (suppression voies/numéros, demandes de composition)
    max_workers: int = Field(default=8, alias="MAX_WORKERS", ge=1)

    # === Référentiel géographique (COG) ===
    cog_dir: Path = Field(default=COG_DIR, alias="COG_DIR")

    logs_dir: Path = Field(default=LOGS_DIR, alias="LOGS_DIR")

    def configure_runtime(self) -> None:
        """Cree les repertoires utiles."""
        ensure_directories([self.logs_dir])


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    settings = Settings()  # type: ignore[arg-type]
    settings.configure_runtime()
    return settings


__all__ = ["Settings", "get_settings"]
