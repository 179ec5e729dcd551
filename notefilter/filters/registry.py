"""
Registry for building filters from serialized configurations.

The registry maps a filter type ("TAG", "COMPOSITE", ...) to a factory and
optional metadata. Creating a filter from an untrusted config runs, in order:

1. a structural check (mapping with a non-empty string "type")
2. factory lookup
3. the type's config schema validator, if one is registered
4. the factory
5. the filter's own ``validate()``

A config rejected at step 3 never reaches the factory, so constructor logic
(regex compilation, child construction) only ever sees schema-valid input.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from notefilter.exceptions.filter_exceptions import (
    FilterConfigError,
    FilterRegistrationError,
    FilterSchemaError,
    FilterValidationError,
    UnknownFilterTypeError,
)
from notefilter.filters.base import BaseFilter, FilterConfig, FilterFactory, FilterValidationResult

# Validates a raw config before any filter object is built
ConfigSchemaValidator = Callable[[Any], FilterValidationResult]


@dataclass
class FilterMetadata:
    """Metadata describing a filter type, used for UI generation and documentation"""
    display_name: str
    description: str
    category: Optional[str] = None
    example: Optional[FilterConfig] = None
    config_schema: Optional[ConfigSchemaValidator] = None


# Accepted metadata keys, camelCase first
_METADATA_KEYS = {
    "display_name": ("displayName", "display_name"),
    "description": ("description",),
    "category": ("category",),
    "example": ("example",),
    "config_schema": ("configSchema", "config_schema"),
}


def _type_name(value: Any) -> str:
    return type(value).__name__


def _coerce_metadata(metadata: Union[FilterMetadata, Mapping[str, Any]]) -> FilterMetadata:
    """Validate metadata and return it as a FilterMetadata"""
    if isinstance(metadata, FilterMetadata):
        values = {
            "display_name": metadata.display_name,
            "description": metadata.description,
            "category": metadata.category,
            "example": metadata.example,
            "config_schema": metadata.config_schema,
        }
    elif isinstance(metadata, Mapping):
        values = {}
        for attr, keys in _METADATA_KEYS.items():
            for key in keys:
                if key in metadata:
                    values[attr] = metadata[key]
                    break
    else:
        raise FilterRegistrationError(
            "Filter metadata must be an object, not an array or primitive"
        )

    if "display_name" not in values:
        raise FilterRegistrationError('Filter metadata must include a "displayName" property')
    if "description" not in values:
        raise FilterRegistrationError('Filter metadata must include a "description" property')

    display_name = values["display_name"]
    description = values["description"]
    if not isinstance(display_name, str):
        raise FilterRegistrationError('Filter metadata "displayName" must be a string')
    if not isinstance(description, str):
        raise FilterRegistrationError('Filter metadata "description" must be a string')
    if not display_name.strip():
        raise FilterRegistrationError('Filter metadata "displayName" cannot be empty')
    if not description.strip():
        raise FilterRegistrationError('Filter metadata "description" cannot be empty')

    category = values.get("category")
    if category is not None:
        if not isinstance(category, str):
            raise FilterRegistrationError('Filter metadata "category" must be a string')
        if not category.strip():
            raise FilterRegistrationError('Filter metadata "category" cannot be empty')

    config_schema = values.get("config_schema")
    if config_schema is not None and not callable(config_schema):
        raise FilterRegistrationError('Filter metadata "configSchema" must be a function')

    example = values.get("example")
    if example is not None:
        if not isinstance(example, Mapping):
            raise FilterRegistrationError('Filter metadata "example" must be a valid FilterConfig object')
        if "type" not in example:
            raise FilterRegistrationError('Filter metadata "example" must have a "type" field')
        if not isinstance(example["type"], str):
            raise FilterRegistrationError('Filter metadata "example.type" must be a string')
        example = dict(example)

    return FilterMetadata(
        display_name=display_name,
        description=description,
        category=category,
        example=example,
        config_schema=config_schema,
    )


class FilterRegistry:
    """
    Registry of filter factories keyed by filter type.

    Features:
    - Factory registration with optional metadata
    - Two-phase validated creation from configs (schema, then instance)
    - Type listing and metadata lookup for UIs

    Registries are plain objects; callers own their lifetime (see
    ``create_filter_registry`` and the application container).
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        """Initialize an empty registry"""
        self._factories: Dict[str, FilterFactory] = {}
        self._metadata: Dict[str, FilterMetadata] = {}
        self.logger = logger or logging.getLogger(__name__)

    def register(
        self,
        filter_type: str,
        factory: FilterFactory,
        metadata: Optional[Union[FilterMetadata, Mapping[str, Any]]] = None,
    ) -> None:
        """
        Register a filter factory for a type.

        Args:
            filter_type: Unique filter type identifier
            factory: Callable building a filter from its config
            metadata: FilterMetadata, or a mapping with displayName/description
                and optional category, example, configSchema

        Raises:
            FilterRegistrationError: On invalid arguments or a duplicate type
        """
        if filter_type is None:
            raise FilterRegistrationError("Filter type cannot be null or undefined")
        if not isinstance(filter_type, str):
            raise FilterRegistrationError(
                f"Filter type must be a string, received {_type_name(filter_type)}"
            )
        if not filter_type.strip():
            raise FilterRegistrationError("Filter type cannot be an empty string")

        if factory is None:
            raise FilterRegistrationError("Filter factory cannot be null or undefined")
        if not callable(factory):
            raise FilterRegistrationError(
                f"Filter factory must be a function, received {_type_name(factory)}"
            )

        coerced = _coerce_metadata(metadata) if metadata is not None else None

        if filter_type in self._factories:
            raise FilterRegistrationError(f"Filter type '{filter_type}' is already registered")

        self._factories[filter_type] = factory
        if coerced is not None:
            self._metadata[filter_type] = coerced

        self.logger.debug("Registered filter type: %s", filter_type)

    def unregister(self, filter_type: str) -> bool:
        """Remove a filter type; returns True if it was registered"""
        removed = self._factories.pop(filter_type, None) is not None
        self._metadata.pop(filter_type, None)
        if removed:
            self.logger.debug("Unregistered filter type: %s", filter_type)
        return removed

    def create_from_config(self, config: FilterConfig) -> BaseFilter:
        """
        Create a filter instance from a configuration.

        Args:
            config: Filter configuration with a "type" field

        Returns:
            A filter whose ``validate()`` succeeded

        Raises:
            FilterConfigError: Config is not a mapping with a non-empty string type
            UnknownFilterTypeError: No factory for the type
            FilterSchemaError: The type's schema validator rejected the config
            FilterValidationError: The built filter reported itself invalid
        """
        try:
            self._check_structure(config)
        except FilterConfigError as e:
            self.logger.warning("Rejected malformed filter config: %s", e.message)
            raise
        filter_type = config["type"]

        factory = self._factories.get(filter_type)
        if factory is None:
            self.logger.warning("Rejected filter config of unknown type: %s", filter_type)
            raise UnknownFilterTypeError(filter_type, self.get_available_types())

        self._check_schema(filter_type, config)

        filter_instance = factory(config)

        validation = filter_instance.validate()
        if not validation.is_valid:
            self.logger.warning("Built %s filter is invalid: %s", filter_type, validation.errors)
            raise FilterValidationError(validation.errors, filter_type=filter_type)

        self.logger.debug("Created %s filter", filter_type)
        return filter_instance

    def _check_structure(self, config: Any) -> None:
        if config is None:
            raise FilterConfigError("Filter configuration cannot be null or undefined")
        if isinstance(config, (list, tuple)):
            raise FilterConfigError("Filter configuration cannot be an array")
        if not isinstance(config, Mapping):
            raise FilterConfigError(
                f"Filter configuration must be an object, received {_type_name(config)}"
            )
        if "type" not in config:
            raise FilterConfigError('Filter configuration must have a "type" field')

        filter_type = config["type"]
        if not isinstance(filter_type, str):
            raise FilterConfigError(
                f'Filter configuration "type" must be a string, received {_type_name(filter_type)}'
            )
        if not filter_type.strip():
            raise FilterConfigError('Filter configuration "type" cannot be an empty string')

    def _check_schema(self, filter_type: str, config: FilterConfig) -> None:
        metadata = self._metadata.get(filter_type)
        if metadata is None or metadata.config_schema is None:
            return

        try:
            result = metadata.config_schema(config)
        except Exception as e:
            self.logger.warning("Schema validator for %s raised: %s", filter_type, str(e))
            raise FilterSchemaError(filter_type, [str(e)]) from e

        if not result.is_valid:
            self.logger.warning(
                "Rejected %s config before construction: %s", filter_type, result.errors
            )
            raise FilterSchemaError(filter_type, result.errors)

    def is_registered(self, filter_type: str) -> bool:
        return filter_type in self._factories

    def get_available_types(self) -> List[str]:
        """Registered filter types, in registration order"""
        return list(self._factories.keys())

    def get_metadata(self, filter_type: str) -> Optional[FilterMetadata]:
        return self._metadata.get(filter_type)

    def get_all_metadata(self) -> Dict[str, FilterMetadata]:
        """Copy of the type -> metadata mapping"""
        return self._metadata.copy()

    def clear(self) -> None:
        self._factories.clear()
        self._metadata.clear()

    @property
    def size(self) -> int:
        return len(self._factories)

    def __len__(self) -> int:
        return len(self._factories)

    def __contains__(self, filter_type: object) -> bool:
        return isinstance(filter_type, str) and filter_type in self._factories
