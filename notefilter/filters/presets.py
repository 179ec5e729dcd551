"""
Built-in filter presets: ready-made saved filters users can apply immediately.

Presets are immutable; every accessor returns a fresh copy.
"""

from enum import Enum
from typing import Dict, List, Optional

from notefilter.config.constants.filters import FilterConfigConstants
from notefilter.filters.types import DateField, DateRangePreset, FilterType, LogicalOperator
from notefilter.models.saved_filters import SavedFilter, SavedFilterMetadata


class PresetFilterId(str, Enum):
    ALL_NOTES = "preset:all-notes"
    TODAY = "preset:today"
    THIS_WEEK = "preset:this-week"
    THIS_MONTH = "preset:this-month"
    RECENT = "preset:recent"
    MODIFIED_TODAY = "preset:modified-today"
    MODIFIED_THIS_WEEK = "preset:modified-this-week"


def _preset(
    preset_id: PresetFilterId,
    name: str,
    description: str,
    tags: List[str],
    icon: str,
    color: str,
    config: Dict,
) -> SavedFilter:
    return SavedFilter(
        metadata=SavedFilterMetadata(
            id=preset_id.value,
            name=name,
            description=description,
            tags=tags,
            created_at=0,
            modified_at=0,
            is_preset=True,
            icon=icon,
            color=color,
        ),
        config=config,
    )


def _date_config(field: DateField, preset: DateRangePreset) -> Dict:
    return {"type": FilterType.DATE_RANGE.value, "field": field.value, "preset": preset.value}


FILTER_PRESETS: Dict[str, SavedFilter] = {
    preset.metadata.id: preset
    for preset in (
        _preset(
            PresetFilterId.ALL_NOTES,
            "All Notes",
            "Show all notes without filtering",
            ["built-in", "basic"],
            "list",
            "#6b7280",
            {"type": FilterType.COMPOSITE.value, "operator": LogicalOperator.AND.value, "filters": []},
        ),
        _preset(
            PresetFilterId.TODAY,
            "Created Today",
            "Notes created today",
            ["built-in", "date", "recent"],
            "calendar-day",
            "#3b82f6",
            _date_config(DateField.CREATED_AT, DateRangePreset.TODAY),
        ),
        _preset(
            PresetFilterId.THIS_WEEK,
            "Created This Week",
            "Notes created this week",
            ["built-in", "date", "recent"],
            "calendar-week",
            "#3b82f6",
            _date_config(DateField.CREATED_AT, DateRangePreset.THIS_WEEK),
        ),
        _preset(
            PresetFilterId.THIS_MONTH,
            "Created This Month",
            "Notes created this month",
            ["built-in", "date"],
            "calendar",
            "#3b82f6",
            _date_config(DateField.CREATED_AT, DateRangePreset.THIS_MONTH),
        ),
        _preset(
            PresetFilterId.RECENT,
            "Recent Notes",
            "Notes from the last 7 days",
            ["built-in", "date", "recent"],
            "clock",
            "#10b981",
            _date_config(DateField.CREATED_AT, DateRangePreset.LAST_7_DAYS),
        ),
        _preset(
            PresetFilterId.MODIFIED_TODAY,
            "Modified Today",
            "Notes modified today",
            ["built-in", "date", "modified"],
            "edit",
            "#f59e0b",
            _date_config(DateField.MODIFIED_AT, DateRangePreset.TODAY),
        ),
        _preset(
            PresetFilterId.MODIFIED_THIS_WEEK,
            "Modified This Week",
            "Notes modified this week",
            ["built-in", "date", "modified"],
            "edit",
            "#f59e0b",
            _date_config(DateField.MODIFIED_AT, DateRangePreset.THIS_WEEK),
        ),
    )
}


def get_all_presets() -> List[SavedFilter]:
    """All built-in presets, in definition order"""
    return [preset.model_copy(deep=True) for preset in FILTER_PRESETS.values()]


def get_preset(preset_id: str) -> Optional[SavedFilter]:
    """Look up a preset by id; accepts a PresetFilterId or its string value"""
    if isinstance(preset_id, PresetFilterId):
        preset_id = preset_id.value
    preset = FILTER_PRESETS.get(preset_id)
    return preset.model_copy(deep=True) if preset else None


def is_preset_id(filter_id: str) -> bool:
    return isinstance(filter_id, str) and filter_id.startswith(FilterConfigConstants.PRESET_ID_PREFIX)


def get_presets_by_tag(tag: str) -> List[SavedFilter]:
    return [preset for preset in get_all_presets() if tag in (preset.metadata.tags or [])]


def search_presets(query: str) -> List[SavedFilter]:
    """Case-insensitive substring search over preset names and descriptions"""
    query_lower = query.lower()
    return [
        preset for preset in get_all_presets()
        if query_lower in preset.metadata.name.lower()
        or query_lower in (preset.metadata.description or "").lower()
    ]
