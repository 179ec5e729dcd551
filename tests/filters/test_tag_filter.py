"""
Tests for TagFilter matching, validation and serialization.
"""
import pytest

from notefilter.filters.tag_filter import TagFilter


@pytest.mark.unit
class TestTagFilterMatching:
    """AND/OR semantics and exclusion precedence."""

    def test_and_requires_every_tag(self, make_note):
        tag_filter = TagFilter({"tags": ["work", "urgent"], "operator": "AND"})

        assert not tag_filter.matches(make_note(tags=["work"]))
        assert tag_filter.matches(make_note(tags=["work", "urgent"]))
        assert tag_filter.matches(make_note(tags=["urgent", "work", "later"]))

    def test_or_is_the_default_operator(self, make_note):
        tag_filter = TagFilter({"tags": ["work", "urgent"]})

        assert tag_filter.serialize()["operator"] == "OR"
        assert tag_filter.matches(make_note(tags=["urgent"]))
        assert not tag_filter.matches(make_note(tags=["personal"]))

    @pytest.mark.parametrize("operator", ["AND", "OR"])
    def test_exclusion_wins_regardless_of_operator(self, make_note, operator):
        tag_filter = TagFilter(
            {"tags": ["work", "urgent"], "excludeTags": ["archived"], "operator": operator}
        )

        assert not tag_filter.matches(make_note(tags=["work", "urgent", "archived"]))

    def test_exclude_only_filter_accepts_everything_else(self, make_note):
        tag_filter = TagFilter({"excludeTags": ["archived"]})

        assert tag_filter.matches(make_note(tags=[]))
        assert tag_filter.matches(make_note(tags=["work"]))
        assert not tag_filter.matches(make_note(tags=["Archived"]))

    def test_case_insensitive_by_default(self, make_note):
        assert TagFilter({"tags": ["Work"]}).matches(make_note(tags=["work"]))

    def test_case_sensitive(self, make_note):
        tag_filter = TagFilter({"tags": ["Work"], "caseSensitive": True})

        assert not tag_filter.matches(make_note(tags=["work"]))
        assert tag_filter.matches(make_note(tags=["Work"]))

    def test_apply_keeps_order_and_input(self, make_note):
        notes = [
            make_note(id=1, tags=["work"]),
            make_note(id=2, tags=["home"]),
            make_note(id=3, tags=["work", "home"]),
        ]
        result = TagFilter({"tags": ["work"]}).apply(notes)

        assert [n.id for n in result] == [1, 3]
        assert len(notes) == 3

    def test_matches_with_content_uses_tags(self, make_note_with_content):
        tag_filter = TagFilter({"tags": ["work"]})

        assert tag_filter.matches_with_content(make_note_with_content(tags=["work"], content="x"))


@pytest.mark.unit
class TestTagFilterValidation:

    def test_valid_config(self):
        assert TagFilter({"tags": ["work"]}).validate().is_valid

    def test_requires_tags_or_exclude_tags(self):
        result = TagFilter({}).validate()

        assert not result.is_valid
        assert "At least one tag or excludeTag must be specified" in result.errors

    def test_rejects_blank_tags(self):
        result = TagFilter({"tags": ["work", "  "]}).validate()

        assert "Tags must be non-empty strings" in result.errors

    def test_rejects_bad_operator_and_flag(self):
        result = TagFilter({"tags": ["work"], "operator": "NOT", "caseSensitive": "yes"}).validate()

        assert "Operator must be AND or OR for TagFilter" in result.errors
        assert "caseSensitive must be a boolean" in result.errors

    def test_collects_every_error(self):
        result = TagFilter({"tags": "work", "excludeTags": [""], "operator": "XOR"}).validate()

        assert len(result.errors) == 3


@pytest.mark.unit
class TestTagFilterSerialization:

    def test_description(self):
        tag_filter = TagFilter({"tags": ["work", "urgent"], "operator": "AND", "excludeTags": ["archived"]})

        assert tag_filter.get_description() == (
            "Notes tagged with all of: 'work', 'urgent' and excluding: 'archived'"
        )

    def test_serialize_copies_config(self):
        config = {"tags": ["work"]}
        tag_filter = TagFilter(config)
        config["tags"].append("leaked")

        serialized = tag_filter.serialize()
        serialized["tags"].append("also-leaked")

        assert tag_filter.tags == ["work"]

    def test_clone_is_independent(self):
        original = TagFilter({"tags": ["work"]})
        clone = original.clone()

        assert clone is not original
        assert clone.serialize() == original.serialize()
        assert clone.serialize()["tags"] is not original.serialize()["tags"]

    def test_to_json(self):
        assert '"type": "TAG"' in TagFilter({"tags": ["work"]}).to_json()
