"""
Exceptions du registre d'adresses.

Une entité absente n'est jamais une erreur : les lectures renvoient None.
Seules les entrées malformées ou non résolubles lèvent une exception.
"""


class BanRegistryError(Exception):
    """Erreur de base du registre."""


class UnresolvableCommuneError(BanRegistryError):
    """Aucune commune actuelle ne descend du code fourni."""

    def __init__(self, code_commune: str):
        self.code_commune = code_commune
        super().__init__(
            f"Impossible de trouver la commune actuelle descendante de {code_commune}"
        )


class InvalidTileError(BanRegistryError, ValueError):
    """Coordonnées de tuile hors bornes ou non entières."""


class ComposerNotConfiguredError(BanRegistryError):
    """Aucune fonction de composition n'est configurée (variable COMPOSER)."""
