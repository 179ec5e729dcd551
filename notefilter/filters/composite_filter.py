from typing import Any, List, Mapping, Optional

from notefilter.filters.base import (
    BaseFilter,
    FilterConfig,
    FilterFactory,
    FilterValidationResult,
    to_plain,
    validation_result,
)
from notefilter.filters.types import FilterType, LogicalOperator
from notefilter.models.notes import Note, NoteWithContent

_COMPOSITE_OPERATORS = (LogicalOperator.AND.value, LogicalOperator.OR.value, LogicalOperator.NOT.value)


class CompositeFilter(BaseFilter):
    """
    Combine child filters with AND / OR / NOT.

    Child filters are built from the ``filters`` configs by ``child_factory``,
    which the caller supplies (normally ``FilterRegistry.create_from_config``);
    this class never looks up a registry itself. Without a factory the
    composite starts with no live children, see ``set_child_filters``.

    A composite with no live children places no restriction and matches every
    note, whatever its operator.

    Example:
        CompositeFilter(
            {
                "operator": "AND",
                "filters": [
                    {"type": "TAG", "tags": ["work"]},
                    {"type": "DATE_RANGE", "field": "created_at", "preset": "THIS_WEEK"},
                ],
            },
            child_factory=registry.create_from_config,
        )
    """

    filter_type = FilterType.COMPOSITE.value

    def __init__(
        self,
        config: Optional[Mapping[str, Any]] = None,
        child_factory: Optional[FilterFactory] = None,
    ) -> None:
        config = to_plain(config or {})
        self._config: FilterConfig = {**config, "type": self.filter_type}
        if "filters" not in self._config or self._config["filters"] is None:
            self._config["filters"] = []

        self._child_filters: List[BaseFilter] = []
        if child_factory is not None and isinstance(self._config["filters"], list):
            self._child_filters = [child_factory(child) for child in self._config["filters"]]

    def set_child_filters(self, filters: List[BaseFilter]) -> None:
        """Attach live child filters built elsewhere"""
        self._child_filters = list(filters)

    def get_child_filters(self) -> List[BaseFilter]:
        return list(self._child_filters)

    def get_operator(self) -> Any:
        return self._config.get("operator")

    def serialize(self) -> FilterConfig:
        return {
            "type": self.filter_type,
            "operator": self._config.get("operator"),
            "filters": to_plain(self._config["filters"]),
        }

    def validate(self) -> FilterValidationResult:
        errors: List[str] = []
        operator = self._config.get("operator")
        filters = self._config["filters"]

        if not operator:
            errors.append("Operator must be specified")
        elif operator not in _COMPOSITE_OPERATORS:
            errors.append("Operator must be AND, OR, or NOT")

        if not isinstance(filters, list):
            errors.append("Filters must be a list")
            filters = []

        if not filters:
            errors.append("At least one filter must be specified")

        if operator == LogicalOperator.NOT.value and len(filters) != 1:
            errors.append("NOT operator must have exactly one filter")

        for index, child in enumerate(self._child_filters, start=1):
            child_validation = child.validate()
            if not child_validation.is_valid:
                errors.append(
                    f"Filter {index} validation failed: {', '.join(child_validation.errors)}"
                )

        return validation_result(errors)

    def get_description(self) -> str:
        if not self._child_filters:
            return "Composite filter (no filters)"

        descriptions = [f.get_description() for f in self._child_filters]
        operator = self._config.get("operator")

        if operator == LogicalOperator.NOT.value:
            return f"NOT ({descriptions[0]})"
        if operator in (LogicalOperator.AND.value, LogicalOperator.OR.value):
            return f"({f' {operator} '.join(descriptions)})"
        return f"Composite filter with {len(self._child_filters)} filters"

    def clone(self) -> "CompositeFilter":
        cloned = CompositeFilter(self.serialize())
        cloned.set_child_filters([f.clone() for f in self._child_filters])
        return cloned

    def matches(self, note: Note) -> bool:
        if not self._child_filters:
            return True

        operator = self._config.get("operator")
        if operator == LogicalOperator.AND.value:
            return all(f.matches(note) for f in self._child_filters)
        if operator == LogicalOperator.OR.value:
            return any(f.matches(note) for f in self._child_filters)
        if operator == LogicalOperator.NOT.value:
            return not self._child_filters[0].matches(note)
        return False

    def matches_with_content(self, note: NoteWithContent) -> bool:
        if not self._child_filters:
            return True

        operator = self._config.get("operator")
        if operator == LogicalOperator.AND.value:
            return all(f.matches_with_content(note) for f in self._child_filters)
        if operator == LogicalOperator.OR.value:
            return any(f.matches_with_content(note) for f in self._child_filters)
        if operator == LogicalOperator.NOT.value:
            return not self._child_filters[0].matches_with_content(note)
        return False
