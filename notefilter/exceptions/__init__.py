from notefilter.exceptions.filter_exceptions import (
    FilterConfigError,
    FilterError,
    FilterNotFoundError,
    FilterRegistrationError,
    FilterSchemaError,
    FilterValidationError,
    InvalidFilterConfigurationError,
    PresetImmutableError,
    RepositoryNotConfiguredError,
    SavedFilterLimitError,
    UnknownFilterTypeError,
)

__all__ = [
    "FilterConfigError",
    "FilterError",
    "FilterNotFoundError",
    "FilterRegistrationError",
    "FilterSchemaError",
    "FilterValidationError",
    "InvalidFilterConfigurationError",
    "PresetImmutableError",
    "RepositoryNotConfiguredError",
    "SavedFilterLimitError",
    "UnknownFilterTypeError",
]
