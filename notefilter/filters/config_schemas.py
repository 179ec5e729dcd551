"""
Config schema validators for the built-in filters.

Each validator checks a raw, untrusted config (typically deserialized JSON)
BEFORE any filter object is built. Validators never raise and collect every
violation in one pass; messages are prefixed with the offending field.
"""

import re
from typing import Any, List, Mapping

from notefilter.filters.base import FilterValidationResult, validation_result
from notefilter.filters.date_range_filter import is_finite_number
from notefilter.filters.types import TEXT_OPERATORS, ComparisonOperator, DateField, DateRangePreset, LogicalOperator

_MISSING = object()

_TAG_OPERATORS = (LogicalOperator.AND.value, LogicalOperator.OR.value)
_COMPOSITE_OPERATORS = (LogicalOperator.AND.value, LogicalOperator.OR.value, LogicalOperator.NOT.value)
_DATE_FIELDS = (DateField.CREATED_AT.value, DateField.MODIFIED_AT.value)
_DATE_PRESETS = frozenset(p.value for p in DateRangePreset)


def _get(config: Any, key: str) -> Any:
    if isinstance(config, Mapping):
        return config.get(key, _MISSING)
    return _MISSING


def _not_a_mapping(config: Any) -> List[str]:
    if isinstance(config, Mapping):
        return []
    return [f"config: Must be an object, received {type(config).__name__}"]


def _is_non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _check_bool(errors: List[str], config: Any, key: str) -> None:
    value = _get(config, key)
    if value is not _MISSING and not isinstance(value, bool):
        errors.append(f"{key}: Must be a boolean")


def _check_tag_list(errors: List[str], value: Any, key: str, label: str) -> None:
    if value is _MISSING:
        return
    if not isinstance(value, list):
        errors.append(f"{key}: Must be an array")
    elif not all(_is_non_empty_str(tag) for tag in value):
        errors.append(f"{key}: All {label} must be non-empty strings")


def validate_tag_filter_config(config: Any) -> FilterValidationResult:
    """Validate a TAG filter config"""
    errors = _not_a_mapping(config)
    tags = _get(config, "tags")
    exclude_tags = _get(config, "excludeTags")

    has_tags = isinstance(tags, list) and len(tags) > 0
    has_exclude_tags = isinstance(exclude_tags, list) and len(exclude_tags) > 0
    if not has_tags and not has_exclude_tags:
        errors.append("tags: At least one tag or excludeTag must be specified")

    _check_tag_list(errors, tags, "tags", "tags")
    _check_tag_list(errors, exclude_tags, "excludeTags", "exclude tags")

    operator = _get(config, "operator")
    if operator is not _MISSING and operator not in _TAG_OPERATORS:
        errors.append("operator: Must be AND or OR for TagFilter")

    _check_bool(errors, config, "caseSensitive")

    return validation_result(errors)


def validate_date_range_filter_config(config: Any) -> FilterValidationResult:
    """Validate a DATE_RANGE filter config"""
    errors = _not_a_mapping(config)
    field = _get(config, "field")
    preset = _get(config, "preset")
    start = _get(config, "start")
    end = _get(config, "end")

    if field is _MISSING or not field:
        errors.append("field: Date field must be specified")
    elif field not in _DATE_FIELDS:
        errors.append("field: Must be either created_at or modified_at")

    if preset is not _MISSING and (not isinstance(preset, str) or preset not in _DATE_PRESETS):
        errors.append(f"preset: Must be one of {', '.join(sorted(_DATE_PRESETS))}")

    has_preset = preset is not _MISSING and bool(preset) and preset != DateRangePreset.CUSTOM.value
    if not has_preset and start is _MISSING and end is _MISSING:
        errors.append("Either preset or custom range (start/end) must be specified")

    if start is not _MISSING and not is_finite_number(start):
        errors.append("start: Must be a finite number")

    if end is not _MISSING and not is_finite_number(end):
        errors.append("end: Must be a finite number")

    if is_finite_number(start) and is_finite_number(end) and start > end:
        errors.append("start/end: Start date must be before or equal to end date")

    return validation_result(errors)


def validate_content_filter_config(config: Any) -> FilterValidationResult:
    """Validate a CONTENT filter config"""
    errors = _not_a_mapping(config)
    query = _get(config, "query")
    pattern = _get(config, "pattern")
    operator = _get(config, "operator")

    if (query is _MISSING or not query) and (pattern is _MISSING or not pattern):
        errors.append("Either query or pattern must be specified")

    for key, value in (("query", query), ("pattern", pattern)):
        if value is _MISSING:
            continue
        if not isinstance(value, str):
            errors.append(f"{key}: Must be a string")
        elif not value.strip():
            errors.append(f"{key}: Must be a non-empty string")

    if operator is not _MISSING and (not isinstance(operator, str) or operator not in TEXT_OPERATORS):
        errors.append(f"operator: Must be one of {', '.join(sorted(TEXT_OPERATORS))}")

    search_title = _get(config, "searchTitle")
    search_content = _get(config, "searchContent")
    title_enabled = True if search_title is _MISSING else search_title
    content_enabled = True if search_content is _MISSING else search_content
    if not title_enabled and not content_enabled:
        errors.append("At least one of searchTitle or searchContent must be true")

    _check_bool(errors, config, "searchTitle")
    _check_bool(errors, config, "searchContent")
    _check_bool(errors, config, "caseSensitive")

    if operator == ComparisonOperator.MATCHES_REGEX.value:
        source = pattern if _is_non_empty_str(pattern) else query
        if _is_non_empty_str(source):
            try:
                re.compile(source)
            except re.error as e:
                errors.append(f"pattern/query: Invalid regex pattern - {e}")

    return validation_result(errors)


def validate_composite_filter_config(config: Any) -> FilterValidationResult:
    """
    Validate a COMPOSITE filter config.

    Only the shape of the direct children is checked here; each child is
    validated against its own schema when the registry builds it.
    """
    errors = _not_a_mapping(config)
    operator = _get(config, "operator")
    filters = _get(config, "filters")

    if operator is _MISSING or not operator:
        errors.append("operator: Logical operator must be specified")
    elif operator not in _COMPOSITE_OPERATORS:
        errors.append("operator: Must be AND, OR, or NOT")

    if filters is _MISSING or filters is None:
        errors.append("filters: Child filters must be specified")
    elif not isinstance(filters, list):
        errors.append("filters: Must be an array")
    else:
        if not filters:
            errors.append("filters: Must have at least one child filter")

        if operator == LogicalOperator.NOT.value and len(filters) != 1:
            errors.append("filters: NOT operator requires exactly one child filter")

        for index, child in enumerate(filters):
            if not isinstance(child, Mapping):
                errors.append(f"filters[{index}]: Must be a valid filter configuration object")
            elif not _is_non_empty_str(child.get("type")):
                errors.append(f'filters[{index}]: Must have a "type" field')

    return validation_result(errors)
