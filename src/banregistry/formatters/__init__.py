from .geojson import format_address_feature, format_toponym_feature

__all__ = ["format_address_feature", "format_toponym_feature"]
