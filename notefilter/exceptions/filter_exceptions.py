from typing import List, Optional


class FilterError(Exception):
    """Base exception for filter-related errors"""

    def __init__(self, message: str, details: dict = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class FilterRegistrationError(FilterError, ValueError):
    """Raised when a filter type cannot be registered"""


class FilterConfigError(FilterError, ValueError):
    """Raised when a filter configuration is structurally invalid"""


class UnknownFilterTypeError(FilterConfigError):
    """Raised when no factory is registered for a filter type"""

    def __init__(self, filter_type: str, available_types: List[str]) -> None:
        self.filter_type = filter_type
        self.available_types = list(available_types)
        super().__init__(
            f"No factory registered for filter type '{filter_type}'. "
            f"Available types: {', '.join(self.available_types)}",
            {"type": filter_type, "available_types": self.available_types},
        )


class FilterSchemaError(FilterConfigError):
    """Raised when a config fails its registered schema validator"""

    def __init__(self, filter_type: str, errors: List[str]) -> None:
        self.filter_type = filter_type
        self.errors = list(errors)
        super().__init__(
            f"Invalid configuration for {filter_type} filter: {'; '.join(self.errors)}",
            {"type": filter_type, "errors": self.errors},
        )


class FilterValidationError(FilterConfigError):
    """Raised when a constructed filter reports itself invalid"""

    def __init__(self, errors: List[str], filter_type: Optional[str] = None) -> None:
        self.filter_type = filter_type
        self.errors = list(errors)
        super().__init__(
            f"Filter validation failed: {', '.join(self.errors)}",
            {"type": filter_type, "errors": self.errors},
        )


class InvalidFilterConfigurationError(FilterError, ValueError):
    """Raised by the config service when a config cannot be persisted"""

    def __init__(self, errors: List[str]) -> None:
        self.errors = list(errors)
        super().__init__(
            f"Invalid filter configuration: {', '.join(self.errors)}",
            {"errors": self.errors},
        )


class FilterNotFoundError(FilterError, LookupError):
    """Raised when a saved filter does not exist"""

    def __init__(self, filter_id: str) -> None:
        self.filter_id = filter_id
        super().__init__(f"Filter with ID '{filter_id}' not found", {"id": filter_id})


class PresetImmutableError(FilterError, PermissionError):
    """Raised on an attempt to modify a built-in preset"""

    def __init__(
        self,
        message: str = "Cannot update built-in preset filters",
        filter_id: str = None,
    ) -> None:
        super().__init__(message, {"id": filter_id})
        self.filter_id = filter_id


class RepositoryNotConfiguredError(FilterError, RuntimeError):
    """Raised when a persistence operation runs without a repository"""

    def __init__(self, message: str = "FilterConfigRepository not configured") -> None:
        super().__init__(message)


class SavedFilterLimitError(FilterError, ValueError):
    """Raised when saving would exceed the saved-filter limit"""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"Cannot save more than {limit} filters", {"limit": limit})
