from .reference_resolver import ReferenceResolver

__all__ = ["ReferenceResolver"]
