"""
Tests de l'extraction des features par tuile.
"""
from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest

from banregistry.common.errors import InvalidTileError
from banregistry.services.tiles import TileFeatureExtractor, tile_key

TILE = "14/8300/5900"
OTHER_TILE = "14/8301/5900"


@pytest.fixture
def tiled(db, voie_factory, numero_factory):
    db.voies.insert_many([
        voie_factory("01001_0010", tiles=[TILE, OTHER_TILE]),
        voie_factory("01001_0020", tiles=[OTHER_TILE]),
    ])
    db.numeros.insert_many([
        numero_factory("01001_0010", 1, tiles=[TILE]),
        numero_factory("01001_0010", 3, tiles=[TILE]),
        numero_factory("01001_0020", 5, tiles=[TILE]),
        numero_factory("01001_0020", 7, tiles=[OTHER_TILE]),
    ])
    return db


class TestAdressesFeatures:

    def test_returns_only_numeros_of_the_tile(self, registry, tiled):
        features = registry.tiles.get_adresses_features(14, 8300, 5900)

        ids = sorted(f["properties"]["id"] for f in features)
        assert ids == ["01001_0010_00001", "01001_0010_00003", "01001_0020_00005"]
        assert all(f["type"] == "Feature" for f in features)

    def test_numeros_are_joined_with_their_voie(self, registry, tiled):
        features = registry.tiles.get_adresses_features(14, 8300, 5900)

        noms = {f["properties"]["id"]: f["properties"]["nomVoie"] for f in features}
        assert noms["01001_0020_00005"] == "Rue 01001_0020"

    def test_formatter_receives_numero_without_provenance(self, db, tiled):
        formatter = MagicMock(return_value={"type": "Feature"})
        extractor = TileFeatureExtractor(db, address_formatter=formatter)

        extractor.get_adresses_features(14, 8300, 5900)

        assert formatter.call_count == 3
        for call in formatter.call_args_list:
            numero, voie = call.args
            assert "adressesOriginales" not in numero
            assert voie["idVoie"] == numero["idVoie"]

    def test_numero_with_missing_voie_is_dropped(self, registry, db, numero_factory, caplog):
        db.numeros.insert_one(numero_factory("01001_0404", 1, tiles=[TILE]))

        with caplog.at_level(logging.WARNING, logger="banregistry.services.tiles"):
            features = registry.tiles.get_adresses_features(14, 8300, 5900)

        assert features == []
        assert "1 numéro(s) ignoré(s)" in caplog.text

    def test_empty_tile(self, registry, tiled):
        assert registry.tiles.get_adresses_features(14, 0, 0) == []


class TestToponymesFeatures:

    def test_returns_voies_of_the_tile(self, registry, tiled):
        features = registry.tiles.get_toponymes_features(14, 8301, 5900)
        assert sorted(f["properties"]["id"] for f in features) == ["01001_0010", "01001_0020"]

    def test_tile_features_combines_both_passes(self, registry, tiled):
        features = registry.tiles.get_tile_features(14, 8300, 5900)

        assert len(features["adresses"]) == 3
        assert [f["properties"]["id"] for f in features["toponymes"]] == ["01001_0010"]


class TestTileKey:

    def test_builds_key(self):
        assert tile_key(14, 8300, 5900) == TILE
        assert tile_key(0, 0, 0) == "0/0/0"

    @pytest.mark.parametrize(
        "z, x, y",
        [
            (-1, 0, 0),
            (25, 0, 0),
            (1, 2, 0),
            (1, 0, -1),
            (14, 16384, 0),
            ("14", 8300, 5900),
            (14, 8300.0, 5900),
            (True, 0, 0),
        ],
    )
    def test_rejects_malformed_tiles(self, z, x, y):
        with pytest.raises(InvalidTileError):
            tile_key(z, x, y)

    def test_invalid_tile_is_a_value_error(self, registry):
        with pytest.raises(ValueError):
            registry.tiles.get_tile_features(3, 8, 0)
