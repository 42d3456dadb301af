"""Tests for compound keys, additive-merge import, search, get, and delete."""

import threading

import pytest

from compendium import storage


# ── Compound keys ────────────────────────────────────────


def test_make_key_uppercases_source():
    assert storage.make_key("Fireball", "phb") == "Fireball::PHB"


@pytest.mark.parametrize("name,source", [("", "PHB"), ("Fireball", ""), (None, "PHB")])
def test_make_key_requires_name_and_source(name, source):
    with pytest.raises(ValueError):
        storage.make_key(name, source)


def test_key_roundtrip():
    key = storage.make_key("Tasha's Hideous Laughter", "xphb")
    assert storage.parse_key(key) == {"name": "Tasha's Hideous Laughter", "source": "XPHB"}


@pytest.mark.parametrize("key", ["Fireball", "a::b::c", ""])
def test_parse_key_rejects_malformed(key):
    with pytest.raises(ValueError, match="Invalid compound key"):
        storage.parse_key(key)


# ── Import ───────────────────────────────────────────────


def test_get_all_empty():
    assert storage.get_all("spells") == {}


def test_import_uses_item_source_and_fallback():
    count = storage.import_items("spells", [
        {"name": "Fireball", "source": "PHB", "level": 3},
        {"name": "Magic Missile", "level": 1},
    ], "SRD")
    assert count == 2
    spells = storage.get_all("spells")
    assert set(spells) == {"Fireball::PHB", "Magic Missile::SRD"}
    assert spells["Magic Missile::SRD"] == {"name": "Magic Missile", "level": 1, "source": "SRD"}


def test_import_keeps_source_spelling():
    storage.import_items("spells", [{"name": "Shield", "source": "phb"}], "SRD")
    assert storage.get_all("spells")["Shield::PHB"]["source"] == "phb"


def test_additive_merge_never_overwrites():
    storage.import_items("spells", [{"name": "Fireball", "source": "PHB", "level": 3}], "PHB")
    storage.import_items("spells", [
        {"name": "Fireball", "source": "PHB", "level": 9, "description": "text"},
    ], "SRD")
    spells = storage.get_all("spells")
    assert list(spells) == ["Fireball::PHB"]
    assert spells["Fireball::PHB"] == {
        "name": "Fireball", "source": "PHB", "level": 3, "description": "text",
    }


def test_merge_backfills_blank_fields():
    storage.import_items("items", [{"name": "Rope", "description": "", "weight": None}], "SRD")
    storage.import_items("items", [{"name": "Rope", "description": "50 feet", "weight": 10}], "SRD")
    rope = storage.get_item("items", "Rope", "SRD")
    assert rope["description"] == "50 feet"
    assert rope["weight"] == 10


def test_merge_ignores_blank_incoming_values():
    storage.import_items("items", [{"name": "Rope", "description": "50 feet"}], "SRD")
    storage.import_items("items", [{"name": "Rope", "description": "", "rarity": None}], "SRD")
    rope = storage.get_item("items", "Rope", "SRD")
    assert rope["description"] == "50 feet"
    assert "rarity" not in rope


def test_merge_keeps_blank_when_both_blank():
    storage.import_items("items", [{"name": "Rope", "description": ""}], "SRD")
    storage.import_items("items", [{"name": "Rope", "description": None}], "SRD")
    assert storage.get_item("items", "Rope", "SRD")["description"] == ""


def test_merge_treats_falsy_non_strings_as_values():
    storage.import_items("spells", [{"name": "Light", "level": 0, "ritual": False}], "SRD")
    storage.import_items("spells", [{"name": "Light", "level": 5, "ritual": True}], "SRD")
    light = storage.get_item("spells", "Light", "SRD")
    assert light["level"] == 0
    assert light["ritual"] is False


def test_import_twice_is_idempotent():
    items = [
        {"name": "Fireball", "source": "PHB", "level": 3},
        {"name": "Magic Missile", "level": 1, "description": ""},
    ]
    storage.import_items("spells", items, "SRD")
    once = storage.get_all("spells")
    storage.import_items("spells", items, "SRD")
    assert storage.get_all("spells") == once


def test_import_skips_items_without_name():
    count = storage.import_items("spells", [{"school": "evocation"}], "SRD")
    assert count == 0
    assert storage.get_all("spells") == {}


def test_import_counts_only_named_items():
    count = storage.import_items("spells", [
        {"name": "Fireball"}, {"school": "evocation"}, "not an object", {"name": ""},
    ], "SRD")
    assert count == 1
    assert list(storage.get_all("spells")) == ["Fireball::SRD"]


def test_import_requires_source():
    with pytest.raises(ValueError, match="source is required"):
        storage.import_items("spells", [{"name": "Fireball"}], "")


def test_import_requires_list():
    with pytest.raises(ValueError):
        storage.import_items("spells", {"name": "Fireball"}, "SRD")


def test_import_unknown_content_type():
    with pytest.raises(ValueError, match="Invalid content type"):
        storage.import_items("vehicles", [{"name": "Cart"}], "SRD")


def test_concurrent_imports_do_not_lose_updates():
    def worker(i: int):
        storage.import_items("monsters", [{"name": f"Goblin {i}"}], "SRD")

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(storage.get_all("monsters")) == 8


# ── Search ───────────────────────────────────────────────


def _seed_search_collection():
    storage.write_json(storage.content_path("spells"), {
        "Fireball::PHB": {"description": "A bright streak of fire"},
        "Magic Missile::SRD": {"description": "missile of force"},
    })


def test_search_by_description():
    _seed_search_collection()
    assert list(storage.search("spells", "fire")) == ["Fireball::PHB"]


def test_search_blank_returns_everything():
    _seed_search_collection()
    assert len(storage.search("spells", "")) == 2
    assert len(storage.search("spells", "   ")) == 2
    assert len(storage.search("spells", None)) == 2


def test_search_by_name_case_insensitive():
    _seed_search_collection()
    assert list(storage.search("spells", "MISSILE")) == ["Magic Missile::SRD"]


def test_search_falls_back_to_desc():
    storage.import_items("conditions", [
        {"name": "Prone", "desc": "Lying on the ground"},
        {"name": "Blinded", "description": "Cannot see", "desc": "ground"},
    ], "SRD")
    assert list(storage.search("conditions", "ground")) == ["Prone::SRD"]


def test_search_ignores_non_string_descriptions():
    storage.import_items("spells", [
        {"name": "Light", "description": ["touch an object"]},
    ], "SRD")
    assert storage.search("spells", "touch") == {}


def test_search_does_not_match_source():
    _seed_search_collection()
    assert storage.search("spells", "phb") == {}


# ── Get / delete ─────────────────────────────────────────


def test_get_item():
    storage.import_items("spells", [{"name": "Fireball", "source": "PHB"}], "SRD")
    assert storage.get_item("spells", "Fireball", "phb")["name"] == "Fireball"
    assert storage.get_item("spells", "Fireball", "SRD") is None


def test_get_item_requires_name():
    with pytest.raises(ValueError):
        storage.get_item("spells", "", "SRD")


def test_delete_item():
    storage.import_items("spells", [{"name": "Fireball"}, {"name": "Shield"}], "SRD")
    assert storage.delete_item("spells", "Fireball", "srd") is True
    assert list(storage.get_all("spells")) == ["Shield::SRD"]


def test_delete_missing_item_does_not_rewrite():
    storage.import_items("spells", [{"name": "Fireball"}], "SRD")
    path = storage.content_path("spells")
    before = path.read_bytes()
    inode = path.stat().st_ino

    assert storage.delete_item("spells", "Nothing", "SRD") is False

    assert path.read_bytes() == before
    assert path.stat().st_ino == inode
