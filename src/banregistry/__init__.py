"""Registre d'adresses : communes, voies, numéros et suivi de composition."""

__version__ = "1.0.0"
