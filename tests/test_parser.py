"""Tests for parsing the BGG collection document into records."""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from bgg_chooser.collection.parser import element_to_dict, parse_collection
from bgg_chooser.error_handling import MalformedResponse
from bgg_chooser.models import GameRecord, Rating
from factories import load_fixture



class TestElementToDict:
    """element_to_dict folds attributes and children together."""

    def test_attributes_and_text_children(self):
        element = ET.fromstring('<item objectid="13"><name sortindex="1">Catan</name><numplays>5</numplays></item>')
        assert element_to_dict(element) == {"objectid": "13", "name": "Catan", "numplays": "5"}

    def test_attribute_only_child_becomes_mapping(self):
        element = ET.fromstring('<rating value="N/A"><average value="7.1" /></rating>')
        assert element_to_dict(element) == {"value": "N/A", "average": {"value": "7.1"}}

    def test_repeated_children_become_list(self):
        element = ET.fromstring('<ranks><rank id="1" /><rank id="2" /></ranks>')
        assert element_to_dict(element) == {"rank": [{"id": "1"}, {"id": "2"}]}

    def test_empty_child_is_none(self):
        element = ET.fromstring('<item><image></image><ranks /></item>')
        assert element_to_dict(element) == {"image": None, "ranks": None}


class TestParseCollection:
    """parse_collection on recorded-style payloads."""

    def test_items_in_document_order(self, alice_collection):
        names = [item.name for item in alice_collection.items]
        assert names == [
            "Catan", "Azul", "Twilight Imperium: Fourth Edition",
            "Wingspan", "Mystery Box", "The Resistance",
        ]
        assert alice_collection.username == "alice"

    def test_identity_and_basic_fields(self, alice_collection):
        catan = alice_collection.items[0]
        assert catan.object_id == 13
        assert catan.collection_id == 1001
        assert catan.identity == (13, 1001)
        assert catan.subtype == "boardgame"
        assert catan.year_published == 1995
        assert catan.image_url == "https://cf.geekdo-images.com/catan.jpg"
        assert catan.thumbnail_url == "https://cf.geekdo-images.com/catan_t.jpg"
        assert catan.num_plays == 5

    def test_stats(self, alice_collection):
        stats = alice_collection.items[0].stats
        assert (stats.min_players, stats.max_players) == (3, 4)
        assert (stats.min_play_time, stats.max_play_time, stats.playing_time) == (60, 120, 120)
        assert stats.num_owned == 231456

    def test_wrapped_rating_values(self, alice_collection):
        rating = alice_collection.items[0].stats.rating
        assert rating.value == 8.0
        assert rating.users_rated == 118543
        assert rating.average == pytest.approx(7.1)
        assert rating.bayes_average == pytest.approx(6.9)
        assert rating.std_dev == pytest.approx(1.48)
        assert rating.median == 0.0

    def test_bare_rating_values(self, alice_collection):
        rating = alice_collection.items[1].stats.rating
        assert rating.value is None  # "N/A"
        assert rating.users_rated == 98000
        assert rating.average == pytest.approx(7.8)
        assert rating.std_dev is None

    def test_ranks(self, alice_collection):
        ranks = alice_collection.items[0].stats.rating.ranks
        assert len(ranks) == 2
        assert ranks[0].friendly_name == "Board Game Rank"
        assert ranks[0].value == 524.0
        assert ranks[1].type == "family"
        assert ranks[1].value is None
        assert ranks[1].bayes_average is None

    def test_single_and_empty_ranks(self, alice_collection):
        assert len(alice_collection.items[1].stats.rating.ranks) == 1
        assert alice_collection.items[2].stats.rating.ranks == ()
        assert alice_collection.items[3].stats.rating.ranks == ()

    def test_status_flags(self, alice_collection):
        azul_status = alice_collection.items[1].status
        assert azul_status.own == 1
        assert azul_status.want_to_play == 1
        assert azul_status.last_modified == "2023-11-20 08:00:00"
        wingspan = alice_collection.items[3]
        assert wingspan.status.wishlist == 1
        assert not wingspan.is_owned

    def test_missing_fields_default(self, alice_collection):
        mystery = alice_collection.items[4]
        assert mystery.stats is None
        assert mystery.year_published is None
        assert mystery.image_url is None
        assert mystery.num_plays == 0
        assert mystery.status.own == 1
        assert mystery.status.prev_owned == 0
        assert mystery.status.last_modified is None
        assert mystery.is_owned

    def test_empty_collection(self):
        result = parse_collection(load_fixture("empty.xml"), "nobody")
        assert result.items == ()

    def test_error_document_is_malformed(self):
        with pytest.raises(MalformedResponse, match="Invalid username specified"):
            parse_collection(load_fixture("errors.xml"), "ghost")

    def test_invalid_xml_is_malformed(self):
        with pytest.raises(MalformedResponse):
            parse_collection(b"<items><item", "alice")

    def test_missing_identity_is_malformed(self):
        payload = b'<items><item objectid="13" subtype="boardgame"><name>Catan</name></item></items>'
        with pytest.raises(MalformedResponse) as excinfo:
            parse_collection(payload, "alice")
        assert excinfo.value.username == "alice"
        assert excinfo.value.kind == "MalformedResponse"


class TestModels:
    """Direct construction of the record models."""

    def test_rating_accepts_both_shapes(self):
        assert Rating.model_validate({"average": {"value": "6.5"}}).average == 6.5
        assert Rating.model_validate({"average": "6.5"}).average == 6.5
        assert Rating.model_validate({"average": {"value": "N/A"}}).average is None
        assert Rating.model_validate({}).average is None

    def test_records_are_immutable(self):
        record = GameRecord(object_id=1, collection_id=2, subtype="boardgame", name="X")
        with pytest.raises(Exception):
            record.name = "Y"

    def test_record_without_status_is_not_owned(self):
        record = GameRecord(object_id=1, collection_id=2, subtype="boardgame", name="X")
        assert record.status is None
        assert not record.is_owned
