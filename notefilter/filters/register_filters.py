import logging
from typing import Optional

from notefilter.filters.composite_filter import CompositeFilter
from notefilter.filters.config_schemas import (
    validate_composite_filter_config,
    validate_content_filter_config,
    validate_date_range_filter_config,
    validate_tag_filter_config,
)
from notefilter.filters.content_filter import ContentFilter
from notefilter.filters.date_range_filter import DateRangeFilter
from notefilter.filters.registry import FilterMetadata, FilterRegistry
from notefilter.filters.tag_filter import TagFilter
from notefilter.filters.types import (
    ComparisonOperator,
    DateField,
    DateRangePreset,
    FilterType,
    LogicalOperator,
)


def register_builtin_filters(registry: FilterRegistry) -> FilterRegistry:
    """
    Register the TAG, DATE_RANGE, CONTENT and COMPOSITE filter types.

    The composite factory builds its children through ``registry`` itself, so
    nested configs get the same schema and instance validation as top-level
    ones.
    """
    registry.register(
        FilterType.TAG.value,
        lambda config: TagFilter(config),
        FilterMetadata(
            display_name="Tag Filter",
            description="Filter notes by tags with AND/OR logic and exclusions",
            category="Basic",
            example={"type": FilterType.TAG.value, "tags": ["work"]},
            config_schema=validate_tag_filter_config,
        ),
    )

    registry.register(
        FilterType.DATE_RANGE.value,
        lambda config: DateRangeFilter(config),
        FilterMetadata(
            display_name="Date Range Filter",
            description="Filter notes by creation or modification date",
            category="Basic",
            example={
                "type": FilterType.DATE_RANGE.value,
                "field": DateField.CREATED_AT.value,
                "preset": DateRangePreset.LAST_7_DAYS.value,
            },
            config_schema=validate_date_range_filter_config,
        ),
    )

    registry.register(
        FilterType.CONTENT.value,
        lambda config: ContentFilter(config),
        FilterMetadata(
            display_name="Content Filter",
            description="Filter notes by text content or regex patterns",
            category="Basic",
            example={
                "type": FilterType.CONTENT.value,
                "query": "important",
                "operator": ComparisonOperator.CONTAINS.value,
            },
            config_schema=validate_content_filter_config,
        ),
    )

    registry.register(
        FilterType.COMPOSITE.value,
        lambda config: CompositeFilter(config, child_factory=registry.create_from_config),
        FilterMetadata(
            display_name="Composite Filter",
            description="Combine multiple filters with AND/OR/NOT logic",
            category="Advanced",
            example={
                "type": FilterType.COMPOSITE.value,
                "operator": LogicalOperator.AND.value,
                "filters": [
                    {"type": FilterType.TAG.value, "tags": ["work"]},
                    {
                        "type": FilterType.DATE_RANGE.value,
                        "field": DateField.CREATED_AT.value,
                        "preset": DateRangePreset.THIS_WEEK.value,
                    },
                ],
            },
            config_schema=validate_composite_filter_config,
        ),
    )

    return registry


def create_filter_registry(logger: Optional[logging.Logger] = None) -> FilterRegistry:
    """New registry with the built-in filter types registered"""
    registry = FilterRegistry(logger=logger)
    register_builtin_filters(registry)
    if logger:
        logger.info("✅ Registered %d built-in filter types", len(registry))
    return registry
