import math
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from notefilter.filters.base import (
    BaseFilter,
    FilterConfig,
    FilterValidationResult,
    to_plain,
    validation_result,
)
from notefilter.filters.types import DateField, DateRangePreset, FilterType
from notefilter.models.notes import Note, NoteWithContent
from notefilter.utils.time_conversion import format_epoch_date, start_of_day, to_epoch

SECONDS_PER_DAY = 24 * 60 * 60

# (start, end) in unix seconds; None leaves that side open
EpochRange = Tuple[Optional[int], Optional[int]]

PRESET_DESCRIPTIONS: Dict[str, str] = {
    DateRangePreset.TODAY.value: "today",
    DateRangePreset.YESTERDAY.value: "yesterday",
    DateRangePreset.LAST_7_DAYS.value: "in the last 7 days",
    DateRangePreset.LAST_30_DAYS.value: "in the last 30 days",
    DateRangePreset.LAST_90_DAYS.value: "in the last 90 days",
    DateRangePreset.THIS_WEEK.value: "this week",
    DateRangePreset.LAST_WEEK.value: "last week",
    DateRangePreset.THIS_MONTH.value: "this month",
    DateRangePreset.LAST_MONTH.value: "last month",
    DateRangePreset.THIS_YEAR.value: "this year",
    DateRangePreset.LAST_YEAR.value: "last year",
}

_ROLLING_DAYS: Dict[str, int] = {
    DateRangePreset.LAST_7_DAYS.value: 7,
    DateRangePreset.LAST_30_DAYS.value: 30,
    DateRangePreset.LAST_90_DAYS.value: 90,
}

_DATE_FIELDS = (DateField.CREATED_AT.value, DateField.MODIFIED_AT.value)
_PRESET_VALUES = frozenset(p.value for p in DateRangePreset)


def is_finite_number(value: Any) -> bool:
    """True for finite int/float values; booleans are not numbers here"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    # math.isfinite overflows on ints wider than a float; every int is finite
    return isinstance(value, int) or math.isfinite(value)


def resolve_preset_range(preset: str, now: datetime) -> EpochRange:
    """
    Resolve a date preset to concrete bounds relative to ``now``.

    Calendar presets use the timezone of ``now`` (local time for naive values);
    weeks start on Monday. Rolling presets (LAST_N_DAYS) end at ``now``.

    Args:
        preset: DateRangePreset value
        now: The instant the filter is evaluated at

    Returns:
        (start_epoch, end_epoch); (None, None) for CUSTOM or unknown presets
    """
    now_sec = to_epoch(now)
    today = now.date()
    tz = now.tzinfo
    today_start = to_epoch(start_of_day(today, tz))

    if preset == DateRangePreset.TODAY.value:
        return today_start, now_sec

    if preset == DateRangePreset.YESTERDAY.value:
        return to_epoch(start_of_day(today - timedelta(days=1), tz)), today_start

    if preset in _ROLLING_DAYS:
        return now_sec - _ROLLING_DAYS[preset] * SECONDS_PER_DAY, now_sec

    if preset in (DateRangePreset.THIS_WEEK.value, DateRangePreset.LAST_WEEK.value):
        monday = today - timedelta(days=today.weekday())
        if preset == DateRangePreset.THIS_WEEK.value:
            return to_epoch(start_of_day(monday, tz)), now_sec
        return (
            to_epoch(start_of_day(monday - timedelta(days=7), tz)),
            to_epoch(start_of_day(monday, tz)),
        )

    if preset == DateRangePreset.THIS_MONTH.value:
        return to_epoch(start_of_day(today.replace(day=1), tz)), now_sec

    if preset == DateRangePreset.LAST_MONTH.value:
        month_start = today.replace(day=1)
        last_month_start = (month_start - timedelta(days=1)).replace(day=1)
        return to_epoch(start_of_day(last_month_start, tz)), to_epoch(start_of_day(month_start, tz))

    if preset == DateRangePreset.THIS_YEAR.value:
        return to_epoch(start_of_day(today.replace(month=1, day=1), tz)), now_sec

    if preset == DateRangePreset.LAST_YEAR.value:
        year_start = today.replace(month=1, day=1)
        return (
            to_epoch(start_of_day(year_start.replace(year=year_start.year - 1), tz)),
            to_epoch(start_of_day(year_start, tz)),
        )

    return None, None


class DateRangeFilter(BaseFilter):
    """
    Filter notes by creation or modification date.

    Either a ``preset`` (TODAY, LAST_7_DAYS, THIS_WEEK, ...) or explicit
    ``start``/``end`` unix-second bounds; either bound may be omitted for an
    open-ended range. Presets are resolved every time the filter is evaluated,
    so a saved "TODAY" filter always means the day it runs. Bounds are
    inclusive.

    ``clock`` returns the current instant and is only used to resolve
    presets; it is not part of the serialized config.
    """

    filter_type = FilterType.DATE_RANGE.value

    def __init__(
        self,
        config: Optional[Mapping[str, Any]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        config = to_plain(config or {})
        self._config: FilterConfig = {**config, "type": self.filter_type}
        self._clock = clock or datetime.now

    def serialize(self) -> FilterConfig:
        return to_plain(self._config)

    def validate(self) -> FilterValidationResult:
        errors: List[str] = []
        field = self._config.get("field")
        preset = self._config.get("preset")
        start = self._config.get("start")
        end = self._config.get("end")

        if not field:
            errors.append("Date field must be specified")
        elif field not in _DATE_FIELDS:
            errors.append("Field must be either created_at or modified_at")

        if preset is not None and (not isinstance(preset, str) or preset not in _PRESET_VALUES):
            errors.append(f"Unknown date range preset: {preset}")

        if not self._uses_preset() and start is None and end is None:
            errors.append("Either preset or custom range (start/end) must be specified")

        if start is not None and not is_finite_number(start):
            errors.append("Start timestamp must be a finite number")

        if end is not None and not is_finite_number(end):
            errors.append("End timestamp must be a finite number")

        if is_finite_number(start) and is_finite_number(end) and start > end:
            errors.append("Start date must be before or equal to end date")

        return validation_result(errors)

    def get_description(self) -> str:
        field_name = "created" if self._config.get("field") == DateField.CREATED_AT.value else "modified"
        start = self._config.get("start")
        end = self._config.get("end")

        if self._uses_preset():
            description = PRESET_DESCRIPTIONS.get(self._config["preset"], "in custom range")
            return f"Notes {field_name} {description}"

        if start is not None and end is not None:
            return f"Notes {field_name} between {format_epoch_date(start)} and {format_epoch_date(end)}"

        if start is not None:
            return f"Notes {field_name} after {format_epoch_date(start)}"

        if end is not None:
            return f"Notes {field_name} before {format_epoch_date(end)}"

        return f"Notes filtered by {field_name} date"

    def clone(self) -> "DateRangeFilter":
        return DateRangeFilter(self.serialize(), clock=self._clock)

    def matches(self, note: Note) -> bool:
        return self._is_in_range(self._timestamp_of(note))

    def matches_with_content(self, note: NoteWithContent) -> bool:
        return self._is_in_range(self._timestamp_of(note))

    def get_effective_range(self) -> EpochRange:
        """Concrete (start, end) bounds as of now"""
        if self._uses_preset():
            return resolve_preset_range(self._config["preset"], self._clock())
        return self._config.get("start"), self._config.get("end")

    def _uses_preset(self) -> bool:
        preset = self._config.get("preset")
        return isinstance(preset, str) and bool(preset) and preset != DateRangePreset.CUSTOM.value

    def _timestamp_of(self, note: Note) -> int:
        if self._config.get("field") == DateField.CREATED_AT.value:
            return note.created_at
        return note.modified_at

    def _is_in_range(self, timestamp: int) -> bool:
        start, end = self.get_effective_range()
        if start is not None and timestamp < start:
            return False
        if end is not None and timestamp > end:
            return False
        return True
