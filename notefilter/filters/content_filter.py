import re
from typing import Any, List, Mapping, Optional, Pattern

from notefilter.filters.base import (
    BaseFilter,
    FilterConfig,
    FilterValidationResult,
    to_plain,
    validation_result,
)
from notefilter.filters.types import TEXT_OPERATORS, ComparisonOperator, FilterType
from notefilter.models.notes import Note, NoteWithContent

OPERATOR_DESCRIPTIONS = {
    ComparisonOperator.EQUALS.value: "equals",
    ComparisonOperator.NOT_EQUALS.value: "does not equal",
    ComparisonOperator.CONTAINS.value: "contains",
    ComparisonOperator.NOT_CONTAINS.value: "does not contain",
    ComparisonOperator.STARTS_WITH.value: "starts with",
    ComparisonOperator.ENDS_WITH.value: "ends with",
    ComparisonOperator.MATCHES_REGEX.value: "matches pattern",
}


class ContentFilter(BaseFilter):
    """
    Filter notes by title and/or body text.

    ``query`` and ``pattern`` are interchangeable text sources (``pattern``
    signals regex intent). For MATCHES_REGEX the pattern is compiled once here;
    an invalid pattern never raises from the constructor, it is reported by
    ``validate()`` instead and the filter matches nothing.

    Metadata-only matching (``matches``) can only look at the title.
    """

    filter_type = FilterType.CONTENT.value

    def __init__(self, config: Optional[Mapping[str, Any]] = None) -> None:
        config = to_plain(config or {})
        self._config: FilterConfig = {
            "operator": ComparisonOperator.CONTAINS.value,
            "caseSensitive": False,
            "searchTitle": True,
            "searchContent": True,
            **config,
            "type": self.filter_type,
        }
        self._regex: Optional[Pattern[str]] = None

        if self._config["operator"] == ComparisonOperator.MATCHES_REGEX.value and self._source_text():
            flags = 0 if self._config["caseSensitive"] else re.IGNORECASE
            try:
                self._regex = re.compile(self._source_text(), flags)
            except (re.error, TypeError):
                # Reported by validate()
                self._regex = None

    def serialize(self) -> FilterConfig:
        return to_plain(self._config)

    def validate(self) -> FilterValidationResult:
        errors: List[str] = []
        query = self._config.get("query")
        pattern = self._config.get("pattern")

        if not query and not pattern:
            errors.append("Either query or pattern must be specified")

        if query is not None and (not isinstance(query, str) or not query.strip()):
            errors.append("Query must be a non-empty string")

        if pattern is not None and (not isinstance(pattern, str) or not pattern.strip()):
            errors.append("Pattern must be a non-empty string")

        operator = self._config["operator"]
        if not isinstance(operator, str) or operator not in TEXT_OPERATORS:
            errors.append(f"Unsupported operator for ContentFilter: {self._config['operator']}")

        for flag in ("caseSensitive", "searchTitle", "searchContent"):
            if not isinstance(self._config[flag], bool):
                errors.append(f"{flag} must be a boolean")

        if not self._config["searchTitle"] and not self._config["searchContent"]:
            errors.append("At least one of searchTitle or searchContent must be true")

        if self._config["operator"] == ComparisonOperator.MATCHES_REGEX.value:
            source = self._source_text()
            if isinstance(source, str) and source:
                try:
                    re.compile(source)
                except re.error as e:
                    errors.append(f"Invalid regex pattern: {e}")

        return validation_result(errors)

    def get_description(self) -> str:
        fields = [
            name for name, key in (("title", "searchTitle"), ("content", "searchContent"))
            if self._config.get(key)
        ]
        field_str = "title or content" if len(fields) == 2 else (fields[0] if fields else "title")
        operator = OPERATOR_DESCRIPTIONS.get(self._config["operator"], "matches")
        return f'Notes where {field_str} {operator} "{self._source_text() or ""}"'

    def clone(self) -> "ContentFilter":
        return ContentFilter(self.serialize())

    def matches(self, note: Note) -> bool:
        # Content is unavailable here, so only the title can match
        if not self._config["searchTitle"]:
            return False
        return self._matches_text(note.title or "")

    def matches_with_content(self, note: NoteWithContent) -> bool:
        title_matches = bool(self._config["searchTitle"]) and self._matches_text(note.title or "")
        content_matches = bool(self._config["searchContent"]) and self._matches_text(note.content or "")
        return title_matches or content_matches

    def _source_text(self) -> Any:
        return self._config.get("query") or self._config.get("pattern")

    def _matches_text(self, text: str) -> bool:
        operator = self._config["operator"]

        if operator == ComparisonOperator.MATCHES_REGEX.value:
            return bool(self._regex and self._regex.search(text))

        query = self._source_text() or ""
        if not isinstance(query, str):
            return False
        if not self._config["caseSensitive"]:
            text = text.lower()
            query = query.lower()

        if operator == ComparisonOperator.EQUALS.value:
            return text == query
        if operator == ComparisonOperator.NOT_EQUALS.value:
            return text != query
        if operator == ComparisonOperator.CONTAINS.value:
            return query in text
        if operator == ComparisonOperator.NOT_CONTAINS.value:
            return query not in text
        if operator == ComparisonOperator.STARTS_WITH.value:
            return text.startswith(query)
        if operator == ComparisonOperator.ENDS_WITH.value:
            return text.endswith(query)
        return False
