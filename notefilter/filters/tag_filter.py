from typing import Any, List, Mapping, Optional

from notefilter.filters.base import (
    BaseFilter,
    FilterConfig,
    FilterValidationResult,
    to_plain,
    validation_result,
)
from notefilter.filters.types import FilterType, LogicalOperator
from notefilter.models.notes import Note, NoteWithContent


def _is_blank_tag(tag: Any) -> bool:
    return not isinstance(tag, str) or not tag.strip()


class TagFilter(BaseFilter):
    """
    Filter notes by tags.

    Config fields:
        tags: tags to match, combined with ``operator`` (default OR)
        excludeTags: tags a note must not carry; exclusion always wins
        operator: "AND" | "OR"
        caseSensitive: compare tags case-sensitively (default False)

    Examples:
        TagFilter({"tags": ["work"]})
        TagFilter({"tags": ["work", "urgent"], "operator": "AND"})
        TagFilter({"tags": ["work"], "excludeTags": ["archived"]})
    """

    filter_type = FilterType.TAG.value

    def __init__(self, config: Optional[Mapping[str, Any]] = None) -> None:
        config = to_plain(config or {})
        self._config: FilterConfig = {
            "type": self.filter_type,
            **config,
            "operator": config.get("operator") or LogicalOperator.OR.value,
            "caseSensitive": config["caseSensitive"] if "caseSensitive" in config else False,
        }
        self._config["type"] = self.filter_type

    @property
    def tags(self) -> List[str]:
        return list(self._config.get("tags") or [])

    @property
    def exclude_tags(self) -> List[str]:
        return list(self._config.get("excludeTags") or [])

    def serialize(self) -> FilterConfig:
        return to_plain(self._config)

    def validate(self) -> FilterValidationResult:
        errors: List[str] = []
        tags = self._config.get("tags")
        exclude_tags = self._config.get("excludeTags")

        if not tags and not exclude_tags:
            errors.append("At least one tag or excludeTag must be specified")

        if tags is not None:
            if not isinstance(tags, list):
                errors.append("Tags must be a list")
            elif any(_is_blank_tag(tag) for tag in tags):
                errors.append("Tags must be non-empty strings")

        if exclude_tags is not None:
            if not isinstance(exclude_tags, list):
                errors.append("Exclude tags must be a list")
            elif any(_is_blank_tag(tag) for tag in exclude_tags):
                errors.append("Exclude tags must be non-empty strings")

        if self._config["operator"] not in (LogicalOperator.AND.value, LogicalOperator.OR.value):
            errors.append("Operator must be AND or OR for TagFilter")

        if not isinstance(self._config["caseSensitive"], bool):
            errors.append("caseSensitive must be a boolean")

        return validation_result(errors)

    def get_description(self) -> str:
        parts: List[str] = []

        if self.tags:
            tag_list = ", ".join(f"'{t}'" for t in self.tags)
            quantifier = "all of" if self._config["operator"] == LogicalOperator.AND.value else "any of"
            parts.append(f"tagged with {quantifier}: {tag_list}")

        if self.exclude_tags:
            exclude_list = ", ".join(f"'{t}'" for t in self.exclude_tags)
            parts.append(f"excluding: {exclude_list}")

        return f"Notes {' and '.join(parts)}"

    def clone(self) -> "TagFilter":
        return TagFilter(self.serialize())

    def matches(self, note: Note) -> bool:
        return self._match_tags(note.tags or [])

    def matches_with_content(self, note: NoteWithContent) -> bool:
        return self._match_tags(note.tags or [])

    def _normalize(self, tags: List[str]) -> List[str]:
        if self._config["caseSensitive"]:
            return list(tags)
        return [t.lower() for t in tags]

    def _match_tags(self, note_tags: List[str]) -> bool:
        normalized_note_tags = set(self._normalize(note_tags))

        # Exclusion short-circuits regardless of operator
        for exclude_tag in self._normalize(self.exclude_tags):
            if exclude_tag in normalized_note_tags:
                return False

        filter_tags = self._normalize(self.tags)
        if not filter_tags:
            return True

        if self._config["operator"] == LogicalOperator.AND.value:
            return all(tag in normalized_note_tags for tag in filter_tags)
        return any(tag in normalized_note_tags for tag in filter_tags)
