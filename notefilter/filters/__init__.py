from notefilter.filters.base import BaseFilter, FilterConfig, FilterFactory, FilterValidationResult
from notefilter.filters.composite_filter import CompositeFilter
from notefilter.filters.content_filter import ContentFilter
from notefilter.filters.date_range_filter import DateRangeFilter
from notefilter.filters.presets import (
    FILTER_PRESETS,
    PresetFilterId,
    get_all_presets,
    get_preset,
    get_presets_by_tag,
    is_preset_id,
    search_presets,
)
from notefilter.filters.register_filters import create_filter_registry, register_builtin_filters
from notefilter.filters.registry import ConfigSchemaValidator, FilterMetadata, FilterRegistry
from notefilter.filters.tag_filter import TagFilter
from notefilter.filters.types import (
    ComparisonOperator,
    DateField,
    DateRangePreset,
    FilterType,
    LogicalOperator,
)

__all__ = [
    "BaseFilter",
    "FilterConfig",
    "FilterFactory",
    "FilterValidationResult",
    "CompositeFilter",
    "ContentFilter",
    "DateRangeFilter",
    "TagFilter",
    "FILTER_PRESETS",
    "PresetFilterId",
    "get_all_presets",
    "get_preset",
    "get_presets_by_tag",
    "is_preset_id",
    "search_presets",
    "create_filter_registry",
    "register_builtin_filters",
    "ConfigSchemaValidator",
    "FilterMetadata",
    "FilterRegistry",
    "ComparisonOperator",
    "DateField",
    "DateRangePreset",
    "FilterType",
    "LogicalOperator",
]
