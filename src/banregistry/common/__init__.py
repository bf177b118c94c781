from .errors import (
    BanRegistryError,
    ComposerNotConfiguredError,
    InvalidTileError,
    UnresolvableCommuneError,
)

__all__ = [
    "BanRegistryError",
    "ComposerNotConfiguredError",
    "InvalidTileError",
    "UnresolvableCommuneError",
]
