"""
Tests for CompositeFilter logic, validation, descriptions and cloning.
"""
import time

import pytest

from notefilter.filters.composite_filter import CompositeFilter
from notefilter.filters.content_filter import ContentFilter
from notefilter.filters.tag_filter import TagFilter

from tests.utils.helpers import DAY


def _composite(operator, *children):
    composite = CompositeFilter(
        {"operator": operator, "filters": [child.serialize() for child in children]}
    )
    composite.set_child_filters(list(children))
    return composite


@pytest.mark.unit
class TestCompositeMatching:

    def test_and(self, make_note):
        composite = _composite("AND", TagFilter({"tags": ["work"]}), TagFilter({"tags": ["urgent"]}))

        assert composite.matches(make_note(tags=["work", "urgent"]))
        assert not composite.matches(make_note(tags=["work"]))

    def test_or(self, make_note):
        composite = _composite("OR", TagFilter({"tags": ["work"]}), TagFilter({"tags": ["urgent"]}))

        assert composite.matches(make_note(tags=["urgent"]))
        assert not composite.matches(make_note(tags=["home"]))

    def test_not(self, make_note):
        composite = _composite("NOT", TagFilter({"tags": ["archived"]}))

        assert composite.matches(make_note(tags=["work"]))
        assert not composite.matches(make_note(tags=["archived"]))

    @pytest.mark.parametrize("operator", ["AND", "OR", "NOT"])
    def test_no_children_is_unrestricted(self, make_note, operator):
        composite = CompositeFilter({"operator": operator, "filters": []})

        assert composite.matches(make_note(tags=["anything"]))

    def test_content_aware_evaluation(self, make_note_with_content):
        composite = _composite(
            "AND", TagFilter({"tags": ["work"]}), ContentFilter({"query": "deadline"})
        )
        note = make_note_with_content(title="Sync", tags=["work"], content="deadline is friday")

        assert composite.matches_with_content(note)
        assert not composite.matches(note)

    def test_end_to_end_through_registry(self, registry, make_note):
        now = int(time.time())
        notes = [
            make_note(id=1, tags=["work"], created_at=now - DAY),
            make_note(id=2, tags=["work", "urgent"], created_at=now - DAY),
            make_note(id=3, tags=["urgent"], created_at=now - DAY),
            make_note(id=4, tags=["work"], created_at=now - 10 * DAY),
        ]
        composite = registry.create_from_config(
            {
                "type": "COMPOSITE",
                "operator": "AND",
                "filters": [
                    {"type": "TAG", "tags": ["work"]},
                    {"type": "DATE_RANGE", "field": "created_at", "preset": "LAST_7_DAYS"},
                ],
            }
        )

        result = composite.apply(notes)

        assert [note.id for note in result] == [1, 2]


@pytest.mark.unit
class TestCompositeValidation:

    @pytest.mark.parametrize("child_count", [0, 2])
    def test_not_requires_exactly_one_child(self, child_count):
        children = [TagFilter({"tags": [f"t{i}"]}) for i in range(child_count)]
        result = _composite("NOT", *children).validate()

        assert "NOT operator must have exactly one filter" in result.errors

    def test_single_child_and_is_valid(self):
        assert _composite("AND", TagFilter({"tags": ["work"]})).validate().is_valid

    def test_empty_composite_is_invalid(self):
        result = CompositeFilter({"operator": "OR", "filters": []}).validate()

        assert "At least one filter must be specified" in result.errors

    def test_operator_checks(self):
        assert "Operator must be specified" in CompositeFilter({"filters": []}).validate().errors
        assert "Operator must be AND, OR, or NOT" in CompositeFilter({"operator": "XOR"}).validate().errors

    def test_child_errors_are_indexed(self):
        composite = _composite("AND", TagFilter({"tags": ["work"]}), TagFilter({}))

        assert composite.validate().errors == [
            "Filter 2 validation failed: At least one tag or excludeTag must be specified"
        ]


@pytest.mark.unit
class TestCompositeDescriptionAndClone:

    def test_description(self):
        composite = _composite("OR", TagFilter({"tags": ["a"]}), TagFilter({"tags": ["b"]}))

        assert composite.get_description() == (
            "(Notes tagged with any of: 'a' OR Notes tagged with any of: 'b')"
        )

    def test_not_description(self):
        composite = _composite("NOT", TagFilter({"tags": ["a"]}))

        assert composite.get_description() == "NOT (Notes tagged with any of: 'a')"

    def test_serialize_shape(self):
        composite = _composite("AND", TagFilter({"tags": ["a"]}))

        assert set(composite.serialize()) == {"type", "operator", "filters"}
        assert composite.serialize()["type"] == "COMPOSITE"

    def test_clone_deep_copies_children(self, make_note):
        original = _composite("AND", TagFilter({"tags": ["a"]}))
        clone = original.clone()

        assert clone.serialize() == original.serialize()
        assert clone.get_child_filters()[0] is not original.get_child_filters()[0]
        assert clone.matches(make_note(tags=["a"]))

    def test_get_child_filters_returns_copy(self):
        composite = _composite("AND", TagFilter({"tags": ["a"]}))
        composite.get_child_filters().clear()

        assert len(composite.get_child_filters()) == 1
        assert composite.get_operator() == "AND"
