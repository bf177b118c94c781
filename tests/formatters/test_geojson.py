from __future__ import annotations

from banregistry.formatters.geojson import format_address_feature, format_toponym_feature


def test_address_feature(voie_factory, numero_factory) -> None:
    voie = voie_factory("01001_0010", nomVoie="Route de la Fontaine")
    numero = numero_factory("01001_0010", 4, suffixe="ter", certifie=True)

    feature = format_address_feature(numero, voie)

    assert feature["type"] == "Feature"
    assert feature["geometry"] == {"type": "Point", "coordinates": [4.92, 46.15]}
    assert feature["properties"]["nomVoie"] == "Route de la Fontaine"
    assert feature["properties"]["suffixe"] == "ter"
    assert feature["properties"]["certifie"] is True
    assert "adressesOriginales" not in feature["properties"]
    assert "lieuDitComplementNom" not in feature["properties"]


def test_toponym_feature_is_centered_on_bbox(voie_factory) -> None:
    voie = voie_factory("01001_0010", displayBBox=[4.0, 46.0, 5.0, 47.0])

    feature = format_toponym_feature(voie)

    assert feature["geometry"] == {"type": "Point", "coordinates": [4.5, 46.5]}
    assert feature["properties"]["id"] == "01001_0010"
    assert "tiles" not in feature["properties"]


def test_toponym_feature_without_bbox(voie_factory) -> None:
    feature = format_toponym_feature(voie_factory("01001_0010", displayBBox=None))
    assert feature["geometry"] is None
