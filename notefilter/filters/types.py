"""
Common types and enums for the filter system.
"""

from enum import Enum


class LogicalOperator(str, Enum):
    """Logical operators for combining filter conditions"""
    AND = "AND"
    OR = "OR"
    NOT = "NOT"


class ComparisonOperator(str, Enum):
    """Text comparison operators understood by ContentFilter"""
    EQUALS = "EQUALS"
    NOT_EQUALS = "NOT_EQUALS"
    CONTAINS = "CONTAINS"
    NOT_CONTAINS = "NOT_CONTAINS"
    STARTS_WITH = "STARTS_WITH"
    ENDS_WITH = "ENDS_WITH"
    MATCHES_REGEX = "MATCHES_REGEX"


TEXT_OPERATORS = frozenset(op.value for op in ComparisonOperator)


class DateRangePreset(str, Enum):
    """Date range presets, resolved against the current time on every evaluation"""
    TODAY = "TODAY"
    YESTERDAY = "YESTERDAY"
    LAST_7_DAYS = "LAST_7_DAYS"
    LAST_30_DAYS = "LAST_30_DAYS"
    LAST_90_DAYS = "LAST_90_DAYS"
    THIS_WEEK = "THIS_WEEK"
    LAST_WEEK = "LAST_WEEK"
    THIS_MONTH = "THIS_MONTH"
    LAST_MONTH = "LAST_MONTH"
    THIS_YEAR = "THIS_YEAR"
    LAST_YEAR = "LAST_YEAR"
    CUSTOM = "CUSTOM"


class DateField(str, Enum):
    """Note timestamp field to filter on"""
    CREATED_AT = "created_at"
    MODIFIED_AT = "modified_at"


class FilterType(str, Enum):
    """Type discriminators of the built-in filter implementations"""
    TAG = "TAG"
    DATE_RANGE = "DATE_RANGE"
    CONTENT = "CONTENT"
    COMPOSITE = "COMPOSITE"
