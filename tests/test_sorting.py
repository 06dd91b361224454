"""Tests for the sort engine and the active sorter rules."""

import pytest

from bgg_chooser.chooser import SORTERS, SortDirection, SortSpec, default_sort_spec, sort_records
from bgg_chooser.chooser.sorting import Sorter, compare_name, compare_optional, compare_rating
from factories import make_game

NAME = SortSpec(active_index=0, direction=SortDirection.ASCENDING)
RATING = SortSpec(active_index=1, direction=SortDirection.DESCENDING)
YEAR = SortSpec(active_index=2, direction=SortDirection.DESCENDING)


def names(records):
    return [record.name for record in records]


class TestComparators:
    def test_compare_optional_defaults(self):
        assert compare_optional(None, 0, 0) == 0
        assert compare_optional(None, 1.5, 0) == -1
        assert compare_optional(3, None, 0) == 1

    def test_missing_rating_is_zero(self):
        unrated = make_game(name="Unrated")
        rated = make_game(name="Rated", average=0.0)
        assert compare_rating(unrated, rated) == 0
        assert compare_rating(unrated, make_game(average=5.0)) == -1

    def test_name_is_case_sensitive(self):
        assert compare_name(make_game(name="azul"), make_game(name="Brass")) == 1


class TestSortRecords:
    def test_by_name(self):
        games = [make_game(name="Catan"), make_game(name="Azul"), make_game(name="Brass")]
        assert names(sort_records(games, NAME)) == ["Azul", "Brass", "Catan"]
        assert names(sort_records(games, SortSpec(0, SortDirection.DESCENDING))) == ["Catan", "Brass", "Azul"]

    def test_uppercase_sorts_before_lowercase(self):
        games = [make_game(name="azul"), make_game(name="Zendo"), make_game(name="Azul")]
        assert names(sort_records(games, NAME)) == ["Azul", "Zendo", "azul"]

    def test_ties_keep_input_order_in_both_directions(self):
        games = [
            make_game(object_id=i, name=name, average=7.0)
            for i, name in enumerate(["First", "Second", "Third"])
        ]
        assert names(sort_records(games, RATING)) == ["First", "Second", "Third"]
        assert names(sort_records(games, SortSpec(1, SortDirection.ASCENDING))) == ["First", "Second", "Third"]

    def test_missing_values_sort_as_zero(self):
        games = [make_game(name="Old", year_published=1990), make_game(name="Unknown"), make_game(name="New", year_published=2020)]
        assert names(sort_records(games, YEAR)) == ["New", "Old", "Unknown"]

    def test_idempotent(self, alice_collection):
        once = sort_records(alice_collection.items, NAME)
        assert sort_records(once, NAME) == once

    def test_does_not_modify_input(self):
        games = [make_game(name="B"), make_game(name="A")]
        sort_records(games, NAME)
        assert names(games) == ["B", "A"]

    def test_custom_sorters(self):
        by_id = (Sorter("Id", lambda a, b: a.object_id - b.object_id),)
        games = [make_game(object_id=3), make_game(object_id=1), make_game(object_id=2)]
        ordered = sort_records(games, SortSpec(0, SortDirection.ASCENDING), by_id)
        assert [game.object_id for game in ordered] == [1, 2, 3]


class TestSortSpec:
    def test_default_is_best_rated_first(self):
        spec = default_sort_spec()
        assert spec.active(SORTERS).name == "BGG Rating"
        assert spec.direction is SortDirection.DESCENDING
        assert spec == SortSpec()

    def test_default_without_rating_sorter(self):
        sorters = (Sorter("Name", compare_name),)
        assert default_sort_spec(sorters) == SortSpec(0, SortDirection.ASCENDING)

    def test_choosing_active_sorter_flips_direction(self):
        spec = RATING.choose("BGG Rating")
        assert spec == SortSpec(1, SortDirection.ASCENDING)
        assert spec.choose("BGG Rating") == RATING

    def test_choosing_other_sorter_uses_its_default_direction(self):
        assert RATING.choose("Name") == NAME
        assert NAME.choose("Year Published") == YEAR

    def test_unknown_sorter(self):
        with pytest.raises(KeyError):
            RATING.choose("Weight")

    def test_out_of_range_index_falls_back(self):
        assert SortSpec(active_index=7).active(SORTERS).name == "Name"

    def test_choose_returns_new_value(self):
        RATING.choose("Name")
        assert RATING == SortSpec(1, SortDirection.DESCENDING)

    def test_invert(self):
        assert SortDirection.ASCENDING.invert() is SortDirection.DESCENDING
        assert SortDirection.DESCENDING.invert() is SortDirection.ASCENDING
