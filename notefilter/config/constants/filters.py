class FilterConfigConstants:
    """Constants for the filter configuration system"""

    # Current schema version
    SCHEMA_VERSION = "1.0.0"

    # Nesting limits for composite filters
    MAX_NESTING_DEPTH = 5
    NESTING_WARNING_DEPTH = 3

    # Maximum filters in a single composite
    MAX_COMPOSITE_FILTERS = 20

    # Maximum number of saved (user) filters
    MAX_SAVED_FILTERS = 100

    DEFAULT_EXPORT_FORMAT = "json"

    # Reserved id prefix for built-in presets
    PRESET_ID_PREFIX = "preset:"
