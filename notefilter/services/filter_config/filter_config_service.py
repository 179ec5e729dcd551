"""
Filter configuration service.

Manages saving, loading and organizing filter configurations. Built-in presets
are served from the static preset table; user filters live in an injected
IFilterConfigRepository.
"""

import logging
import uuid
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from notefilter.config.settings import FilterSettings
from notefilter.exceptions.filter_exceptions import (
    FilterError,
    FilterNotFoundError,
    InvalidFilterConfigurationError,
    PresetImmutableError,
    RepositoryNotConfiguredError,
    SavedFilterLimitError,
)
from notefilter.filters.base import BaseFilter, FilterConfig, to_plain
from notefilter.filters.composite_filter import CompositeFilter
from notefilter.filters.presets import get_all_presets, get_preset, is_preset_id
from notefilter.filters.registry import FilterRegistry
from notefilter.filters.types import FilterType
from notefilter.models.saved_filters import (
    FilterConfigImportExportResult,
    FilterConfigValidationResult,
    FilterExportOptions,
    FilterImportOptions,
    SavedFilter,
    SavedFilterMetadata,
)
from notefilter.services.filter_config.interface.repository import IFilterConfigRepository
from notefilter.utils.time_conversion import get_epoch_timestamp_in_seconds

UPDATE_PRESET_MESSAGE = "Cannot update built-in preset filters"
DELETE_PRESET_MESSAGE = "Cannot delete built-in preset filters"


def measure_config_tree(config: Any) -> Tuple[int, int]:
    """
    Shape of a config tree as ``(nesting depth, widest composite)``.

    Depth counts the COMPOSITE ancestors above the deepest leaf; a leaf or an
    empty composite adds nothing. Width is the largest number of direct
    children held by any composite. The walk uses an explicit stack, so input
    of any depth is measured without recursion.
    """
    depth = 0
    width = 0
    stack: List[Tuple[Any, int]] = [(config, 0)]

    while stack:
        node, node_depth = stack.pop()
        is_composite = isinstance(node, Mapping) and node.get("type") == FilterType.COMPOSITE.value
        children = node.get("filters") if is_composite else None

        if not isinstance(children, list):
            depth = max(depth, node_depth)
            continue

        width = max(width, len(children))
        if not children:
            depth = max(depth, node_depth)
            continue

        stack.extend((child, node_depth + 1) for child in children)

    return depth, width


def get_config_nesting_depth(config: Any) -> int:
    """Number of COMPOSITE ancestors above the deepest leaf of a config tree"""
    return measure_config_tree(config)[0]


class FilterConfigService:
    """Service for managing built-in and user-saved filter configurations"""

    def __init__(
        self,
        registry: FilterRegistry,
        repository: Optional[IFilterConfigRepository] = None,
        settings: Optional[FilterSettings] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.registry = registry
        self.repository = repository
        self.settings = settings or FilterSettings()
        self.logger = logger or logging.getLogger(__name__)

    def set_repository(self, repository: IFilterConfigRepository) -> None:
        self.repository = repository
        self.logger.debug("📦 Filter config repository set: %s", type(repository).__name__)

    def _require_repository(self) -> IFilterConfigRepository:
        if self.repository is None:
            raise RepositoryNotConfiguredError()
        return self.repository

    async def get_all_filters(self) -> List[SavedFilter]:
        """Presets first, then saved filters"""
        saved = await self.repository.get_all() if self.repository else []
        return get_all_presets() + list(saved)

    async def get_filter_by_id(self, filter_id: str) -> Optional[SavedFilter]:
        if is_preset_id(filter_id):
            return get_preset(filter_id)
        if self.repository is None:
            return None
        return await self.repository.get_by_id(filter_id)

    async def get_user_filters(self) -> List[SavedFilter]:
        if self.repository is None:
            return []
        saved = await self.repository.get_all()
        return [f for f in saved if not f.metadata.is_preset]

    async def search_filters(self, query: str) -> List[SavedFilter]:
        """Presets matching by name/description (case-insensitive) plus repository search"""
        query_lower = query.lower()
        presets = [
            p for p in get_all_presets()
            if query_lower in p.metadata.name.lower()
            or query_lower in (p.metadata.description or "").lower()
        ]
        saved = await self.repository.search(query) if self.repository else []
        return presets + list(saved)

    async def save_filter(
        self,
        name: str,
        description: Optional[str],
        config: FilterConfig,
        *,
        tags: Optional[List[str]] = None,
        icon: Optional[str] = None,
        color: Optional[str] = None,
    ) -> SavedFilter:
        """
        Validate and persist a new user filter.

        Raises:
            RepositoryNotConfiguredError: No repository set
            InvalidFilterConfigurationError: The config failed validation
            SavedFilterLimitError: The repository already holds the maximum number of user filters
        """
        repository = self._require_repository()

        validation = self.validate_filter_config(config)
        if not validation.is_valid:
            self.logger.warning("⚠️ Rejected filter '%s': %s", name, validation.errors)
            raise InvalidFilterConfigurationError(validation.errors)

        await self._ensure_capacity(repository)

        now = get_epoch_timestamp_in_seconds()
        saved_filter = SavedFilter(
            metadata=SavedFilterMetadata(
                id=str(uuid.uuid4()),
                name=name,
                description=description,
                tags=tags or [],
                created_at=now,
                modified_at=now,
                is_preset=False,
                icon=icon,
                color=color,
            ),
            config=to_plain(config),
        )

        await repository.save(saved_filter)
        self.logger.info("💾 Saved filter '%s' (%s)", name, saved_filter.metadata.id)
        return saved_filter

    async def update_filter(
        self,
        filter_id: str,
        *,
        name: Optional[str] = None,
        description: Optional[str] = None,
        config: Optional[FilterConfig] = None,
        tags: Optional[List[str]] = None,
        icon: Optional[str] = None,
        color: Optional[str] = None,
    ) -> SavedFilter:
        """
        Apply partial updates to a saved filter; fields left as None keep their value.

        Raises:
            PresetImmutableError: ``filter_id`` names a built-in preset
            FilterNotFoundError: No saved filter with that id
            InvalidFilterConfigurationError: The new config failed validation
        """
        if is_preset_id(filter_id):
            raise PresetImmutableError(UPDATE_PRESET_MESSAGE, filter_id=filter_id)

        repository = self._require_repository()
        existing = await repository.get_by_id(filter_id)
        if existing is None:
            raise FilterNotFoundError(filter_id)

        if config is not None:
            validation = self.validate_filter_config(config)
            if not validation.is_valid:
                self.logger.warning("⚠️ Rejected update of filter %s: %s", filter_id, validation.errors)
                raise InvalidFilterConfigurationError(validation.errors)

        metadata = existing.metadata.model_copy(
            update={
                "name": name if name is not None else existing.metadata.name,
                "description": description if description is not None else existing.metadata.description,
                "tags": tags if tags is not None else existing.metadata.tags,
                "icon": icon if icon is not None else existing.metadata.icon,
                "color": color if color is not None else existing.metadata.color,
                "modified_at": get_epoch_timestamp_in_seconds(),
            }
        )
        updated = SavedFilter(
            metadata=metadata,
            config=to_plain(config) if config is not None else existing.config,
        )

        await repository.update(filter_id, updated)
        self.logger.info("✏️ Updated filter %s", filter_id)
        return updated

    async def delete_filter(self, filter_id: str) -> bool:
        if is_preset_id(filter_id):
            raise PresetImmutableError(DELETE_PRESET_MESSAGE, filter_id=filter_id)

        repository = self._require_repository()
        deleted = await repository.delete(filter_id)
        if deleted:
            self.logger.info("🗑️ Deleted filter %s", filter_id)
        return deleted

    async def create_filter(self, filter_id: str) -> BaseFilter:
        """
        Build a live filter graph from a saved filter or preset.

        Raises:
            FilterNotFoundError: Unknown id
            FilterConfigError: The stored config no longer builds
        """
        saved_filter = await self.get_filter_by_id(filter_id)
        if saved_filter is None:
            raise FilterNotFoundError(filter_id)

        config = saved_filter.config
        if (
            saved_filter.metadata.is_preset
            and config.get("type") == FilterType.COMPOSITE.value
            and not config.get("filters")
        ):
            # Unrestricted composite ("All Notes"); matches every note
            return CompositeFilter(config)

        return self.registry.create_from_config(config)

    def get_config_nesting_depth(self, config: Any) -> int:
        return get_config_nesting_depth(config)

    def validate_filter_config(self, config: FilterConfig) -> FilterConfigValidationResult:
        """
        Validate a config through the registry plus tree-shape limits.

        Nesting deeper than ``settings.max_nesting_depth`` and composites wider
        than ``settings.max_composite_filters`` are errors; nesting deeper than
        ``settings.nesting_warning_depth`` (within the limit) only warns.
        Never raises.
        """
        errors: List[str] = []
        warnings: List[str] = []

        filter_type = config.get("type") if isinstance(config, Mapping) else None
        if isinstance(filter_type, str) and not self.registry.is_registered(filter_type):
            errors.append(f"Unknown filter type: {filter_type}")
            return FilterConfigValidationResult(is_valid=False, errors=errors, warnings=warnings)

        depth, width = measure_config_tree(config)
        if depth > self.settings.max_nesting_depth:
            errors.append(
                f"Filter nesting depth {depth} exceeds maximum {self.settings.max_nesting_depth}"
            )
        elif depth > self.settings.nesting_warning_depth:
            warnings.append(f"Deep nesting ({depth} levels) may impact performance")

        if width > self.settings.max_composite_filters:
            errors.append(
                f"Composite filter has {width} child filters, maximum is {self.settings.max_composite_filters}"
            )

        if not errors:
            try:
                self.registry.create_from_config(config)
            except FilterError as e:
                errors.append(f"Filter creation failed: {e.message}")
            except Exception as e:
                errors.append(f"Filter creation failed: {str(e) or 'Unknown error'}")

        if errors:
            self.logger.debug("Filter config rejected: %s", errors)

        return FilterConfigValidationResult(is_valid=not errors, errors=errors, warnings=warnings)

    async def export_filters(
        self, options: Optional[FilterExportOptions] = None
    ) -> FilterConfigImportExportResult:
        """
        Export presets and/or user filters, or an explicit list of ids.

        Unknown ids are reported per item; the remaining filters are still exported.
        """
        options = options or FilterExportOptions()
        exported: List[SavedFilter] = []
        errors: List[str] = []

        try:
            if options.filter_ids:
                for filter_id in options.filter_ids:
                    saved_filter = await self.get_filter_by_id(filter_id)
                    if saved_filter is not None:
                        exported.append(saved_filter)
                    else:
                        errors.append(f"Filter not found: {filter_id}")
            else:
                for saved_filter in await self.get_all_filters():
                    if saved_filter.metadata.is_preset:
                        if options.include_presets:
                            exported.append(saved_filter)
                    elif options.include_user_filters:
                        exported.append(saved_filter)
        except Exception as e:
            self.logger.error("❌ Failed to export filters: %s", str(e))
            return FilterConfigImportExportResult(
                success=False, count=0, errors=[str(e) or "Export failed"]
            )

        if errors:
            self.logger.warning("⚠️ Export finished with %d errors", len(errors))
        self.logger.info("📤 Exported %d filters", len(exported))

        return FilterConfigImportExportResult(
            success=not errors,
            count=len(exported),
            errors=errors or None,
            filter_ids=[f.metadata.id for f in exported],
            filters=exported,
        )

    async def import_filters(
        self,
        filters: List[Union[SavedFilter, Dict[str, Any]]],
        options: Optional[FilterImportOptions] = None,
    ) -> FilterConfigImportExportResult:
        """
        Import saved filters (models or their camelCase dict form).

        Each item is handled independently: malformed records, invalid
        configs, existing ids (without ``overwrite``) and repository failures
        become entries in ``errors`` while the rest are imported.
        """
        repository = self._require_repository()
        options = options or FilterImportOptions()
        imported: List[str] = []
        errors: List[str] = []

        for index, item in enumerate(filters):
            try:
                saved_filter = item if isinstance(item, SavedFilter) else SavedFilter.model_validate(item)
            except ValidationError as e:
                errors.append(f"Filter #{index + 1}: invalid record ({e.error_count()} errors)")
                continue

            name = saved_filter.metadata.name
            filter_id = saved_filter.metadata.id

            if saved_filter.metadata.is_preset or is_preset_id(filter_id):
                if not options.skip_presets:
                    errors.append(f"Filter '{name}': {UPDATE_PRESET_MESSAGE}")
                continue

            try:
                if options.validate_configs:
                    validation = self.validate_filter_config(saved_filter.config)
                    if not validation.is_valid:
                        self.logger.warning("⚠️ Skipping invalid filter '%s': %s", name, validation.errors)
                        errors.append(f"Filter '{name}': {', '.join(validation.errors)}")
                        continue

                existing = await repository.get_by_id(filter_id)
                if existing is not None and not options.overwrite:
                    errors.append(f"Filter '{name}' already exists (ID: {filter_id})")
                    continue

                if existing is not None:
                    await repository.update(filter_id, saved_filter)
                else:
                    await self._ensure_capacity(repository)
                    await repository.save(saved_filter)
                imported.append(filter_id)
            except Exception as e:
                self.logger.error("❌ Failed to import filter '%s': %s", name, str(e))
                errors.append(f"Failed to import '{name}': {str(e) or 'Unknown error'}")

        if errors:
            self.logger.warning("⚠️ Import finished with %d errors", len(errors))
        self.logger.info("📥 Imported %d of %d filters", len(imported), len(filters))

        return FilterConfigImportExportResult(
            success=not errors,
            count=len(imported),
            errors=errors or None,
            filter_ids=imported,
        )

    async def _ensure_capacity(self, repository: IFilterConfigRepository) -> None:
        saved = await repository.get_all()
        user_filters = [f for f in saved if not f.metadata.is_preset]
        if len(user_filters) >= self.settings.max_saved_filters:
            raise SavedFilterLimitError(self.settings.max_saved_filters)
