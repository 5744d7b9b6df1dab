"""Tests for the raag catalog."""

import dataclasses
import json

import pytest

from sur_engine.errors import ConfigurationError
from sur_engine.raag.catalog import (
    RaagCatalog,
    TimeOfDay,
    default_catalog,
    get_thaat,
    load_catalog,
    parse_raag,
)
from sur_engine.swara.mapper import SWARA_INDEX


@pytest.fixture
def catalog():
    return default_catalog()


def _entry(**overrides):
    entry = {
        "id": "Test",
        "display_name": "राग टेस्ट",
        "english_name": "Test",
        "thaat": "Kalyan",
        "aroha": ["Sa", "Re", "Ga"],
        "avaroha": ["Ga", "Re", "Sa"],
        "pakad": ["Re", "Ga"],
        "vadi": "Ga",
        "samvadi": "Sa",
        "time": "Evening",
        "mood": "Calm",
    }
    entry.update(overrides)
    return entry


def _write_catalog(tmp_path, entries):
    path = tmp_path / "raags.json"
    path.write_text(json.dumps({"raags": entries}), encoding="utf-8")
    return path


class TestRaagDatabase:
    def test_loads_27_raags(self, catalog):
        assert len(catalog) == 27

    def test_first_and_last(self, catalog):
        assert catalog.ids[0] == "Yaman"
        assert catalog.ids[-1] == "Miyan Ki Todi"

    def test_yaman_definition(self, catalog):
        raag = catalog.get("Yaman")
        assert raag.display_name == "राग यमन"
        assert raag.aroha == ("Sa", "Re", "Ga", "Ma#", "Pa", "Dha", "Ni", "Sa")
        assert raag.avaroha == ("Sa", "Ni", "Dha", "Pa", "Ma#", "Ga", "Re", "Sa")
        assert raag.pakad == ("Ni", "Re", "Ga", "Ma#", "Ga", "Re", "Sa")
        assert raag.vadi == "Ga"
        assert raag.samvadi == "Ni"
        assert raag.time == TimeOfDay.EVENING
        assert raag.thaat == "Kalyan"

    def test_darbari_definition(self, catalog):
        raag = catalog.get("Darbari Kanada")
        assert raag.vadi == "♭Dha"
        assert raag.samvadi == "♭Ga"
        assert raag.time == TimeOfDay.NIGHT

    def test_every_pattern_uses_the_alphabet(self, catalog):
        for raag in catalog:
            for swara in raag.aroha + raag.avaroha + raag.pakad:
                assert swara in SWARA_INDEX, (raag.id, swara)

    def test_vadi_and_samvadi_in_aroha(self, catalog):
        for raag in catalog:
            assert raag.vadi in raag.aroha, raag.id
            assert raag.samvadi in raag.aroha, raag.id

    def test_definitions_are_immutable(self, catalog):
        with pytest.raises(dataclasses.FrozenInstanceError):
            catalog.get("Yaman").vadi = "Pa"

    def test_default_catalog_is_cached(self):
        assert default_catalog() is default_catalog()


class TestLookups:
    def test_lookup_case_insensitive(self, catalog):
        assert catalog.get("yaman").id == "Yaman"
        assert catalog.get("miyan ki todi").id == "Miyan Ki Todi"

    def test_unknown_lookup(self, catalog):
        assert catalog.get("Hamsadhwani") is None
        assert "Hamsadhwani" not in catalog
        assert "Yaman" in catalog

    @pytest.mark.parametrize("raag_id,thaat", [
        ("Yaman", "Kalyan"),
        ("Deshkar", "Kalyan"),
        ("Malkauns", "Bhairavi"),
        ("Rageshri", "Khamaj"),
        ("Pilu", "Kafi"),
        ("Jaunpuri", "Asavari"),
        ("Durga", "Bilawal"),
        ("Shree", "Purvi"),
        ("Sohini", "Marwa"),
        ("Todi", "Todi"),
    ])
    def test_get_thaat(self, catalog, raag_id, thaat):
        assert catalog.get_thaat(raag_id) == thaat
        assert get_thaat(raag_id) == thaat

    def test_get_thaat_unknown(self, catalog):
        assert catalog.get_thaat("Hamsadhwani") == "Unknown"

    def test_thaats(self, catalog):
        thaats = catalog.thaats()
        assert len(thaats) == 10
        assert thaats["Kalyan"] == ["Yaman", "Shuddha Kalyan", "Bhoopali", "Deshkar"]
        assert thaats["Bhairav"] == ["Bhairav", "Ahir Bhairav", "Nat Bhairav"]

    def test_by_thaat(self, catalog):
        assert [r.id for r in catalog.by_thaat("marwa")] == ["Marwa", "Sohini"]

    def test_by_time(self, catalog):
        night = [r.id for r in catalog.by_time(TimeOfDay.NIGHT)]
        assert night == ["Malkauns", "Darbari Kanada", "Bageshri"]
        afternoon = [r.id for r in catalog.by_time(TimeOfDay.AFTERNOON)]
        assert afternoon == ["Purvi", "Shree", "Marwa", "Sohini"]


class TestCatalogLoading:
    def test_load_custom_file(self, tmp_path):
        catalog = load_catalog(_write_catalog(tmp_path, [_entry()]))
        assert catalog.ids == ["Test"]
        assert catalog.get("Test").aroha == ("Sa", "Re", "Ga")

    def test_missing_field(self, tmp_path):
        entry = _entry()
        del entry["pakad"]
        with pytest.raises(ConfigurationError, match="pakad"):
            load_catalog(_write_catalog(tmp_path, [entry]))

    def test_unknown_swara(self):
        with pytest.raises(ConfigurationError, match="Ri2"):
            parse_raag(_entry(aroha=["Sa", "Ri2", "Ga"]))

    def test_octave_marked_swara_rejected(self):
        with pytest.raises(ConfigurationError):
            parse_raag(_entry(avaroha=["Sa*", "Ni", "Sa"]))

    def test_empty_pattern(self):
        with pytest.raises(ConfigurationError):
            parse_raag(_entry(pakad=[]))

    def test_unknown_time(self):
        with pytest.raises(ConfigurationError, match="Dawn"):
            parse_raag(_entry(time="Dawn"))

    def test_duplicate_ids(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Duplicate"):
            load_catalog(_write_catalog(tmp_path, [_entry(), _entry()]))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_catalog(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "raags.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_catalog(path)

    def test_missing_raags_list(self, tmp_path):
        path = tmp_path / "raags.json"
        path.write_text(json.dumps({"ragas": []}), encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_catalog(path)

    def test_catalog_from_definitions(self):
        catalog = RaagCatalog([parse_raag(_entry())])
        assert len(catalog) == 1
        assert list(catalog)[0].id == "Test"
