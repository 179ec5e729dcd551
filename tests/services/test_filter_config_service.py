"""
Tests for FilterConfigService: persistence rules, validation limits and import/export.
"""
import pytest

from notefilter.config.settings import FilterSettings
from notefilter.exceptions import (
    FilterNotFoundError,
    InvalidFilterConfigurationError,
    PresetImmutableError,
    RepositoryNotConfiguredError,
    SavedFilterLimitError,
)
from notefilter.filters.composite_filter import CompositeFilter
from notefilter.models.saved_filters import FilterExportOptions, FilterImportOptions
from notefilter.services.filter_config.filter_config_service import FilterConfigService

from tests.utils.helpers import nested_composite

WORK_FILTER = {"type": "TAG", "tags": ["work"]}


@pytest.mark.unit
class TestValidateFilterConfig:

    def test_valid_flat_config(self, service):
        result = service.validate_filter_config(WORK_FILTER)

        assert result.is_valid
        assert result.warnings == []

    def test_depth_five_passes(self, service):
        result = service.validate_filter_config(nested_composite(5))

        assert result.is_valid
        assert result.warnings == ["Deep nesting (5 levels) may impact performance"]

    def test_depth_six_fails(self, service):
        result = service.validate_filter_config(nested_composite(6))

        assert not result.is_valid
        assert result.errors == ["Filter nesting depth 6 exceeds maximum 5"]

    def test_depth_four_warns(self, service):
        result = service.validate_filter_config(nested_composite(4))

        assert result.is_valid
        assert result.warnings

    def test_depth_three_is_quiet(self, service):
        assert service.validate_filter_config(nested_composite(3)).warnings == []

    def test_nesting_depth(self, service):
        assert service.get_config_nesting_depth(WORK_FILTER) == 0
        assert service.get_config_nesting_depth(nested_composite(2)) == 2
        assert service.get_config_nesting_depth({"type": "COMPOSITE", "operator": "AND", "filters": []}) == 0

    def test_composite_width_limit(self, service):
        config = {
            "type": "COMPOSITE",
            "operator": "OR",
            "filters": [{"type": "TAG", "tags": [f"t{i}"]} for i in range(21)],
        }

        result = service.validate_filter_config(config)

        assert result.errors == ["Composite filter has 21 child filters, maximum is 20"]

    def test_unknown_type(self, service):
        result = service.validate_filter_config({"type": "SENTIMENT"})

        assert result.errors == ["Unknown filter type: SENTIMENT"]

    def test_creation_errors_are_reported(self, service):
        result = service.validate_filter_config({"type": "TAG", "tags": "work"})

        assert not result.is_valid
        assert result.errors[0].startswith("Filter creation failed: Invalid configuration for TAG filter")

    def test_structural_errors_are_reported(self, service):
        result = service.validate_filter_config(None)

        assert result.errors == ["Filter creation failed: Filter configuration cannot be null or undefined"]

    def test_very_deep_nesting_is_reported_not_raised(self, service):
        result = service.validate_filter_config(nested_composite(1000))

        assert not result.is_valid
        assert result.errors == ["Filter nesting depth 1000 exceeds maximum 5"]
        assert service.get_config_nesting_depth(nested_composite(3000)) == 3000

    def test_width_is_found_below_the_top_level(self, service):
        wide = {"type": "COMPOSITE", "operator": "OR", "filters": [WORK_FILTER] * 21}
        config = {"type": "COMPOSITE", "operator": "AND", "filters": [WORK_FILTER, wide]}

        result = service.validate_filter_config(config)

        assert result.errors == ["Composite filter has 21 child filters, maximum is 20"]

    def test_limits_follow_settings(self, registry):
        strict = FilterConfigService(registry, settings=FilterSettings(max_nesting_depth=2, nesting_warning_depth=1))

        assert not strict.validate_filter_config(nested_composite(3)).is_valid
        assert strict.validate_filter_config(nested_composite(2)).warnings


@pytest.mark.unit
class TestSavedFilters:

    @pytest.mark.asyncio
    async def test_save_assigns_id_and_timestamps(self, service, repository):
        saved = await service.save_filter("Work", "All work notes", WORK_FILTER, tags=["team"], color="#fff")

        assert saved.metadata.id in repository.filters
        assert not saved.metadata.is_preset
        assert saved.metadata.created_at == saved.metadata.modified_at > 0
        assert saved.metadata.tags == ["team"]
        assert saved.config == WORK_FILTER

    @pytest.mark.asyncio
    async def test_save_rejects_invalid_config(self, service, repository):
        with pytest.raises(InvalidFilterConfigurationError, match="^Invalid filter configuration: "):
            await service.save_filter("Broken", None, {"type": "TAG"})

        assert repository.filters == {}

    @pytest.mark.asyncio
    async def test_save_requires_repository(self, registry):
        with pytest.raises(RepositoryNotConfiguredError, match="FilterConfigRepository not configured"):
            await FilterConfigService(registry).save_filter("Work", None, WORK_FILTER)

    @pytest.mark.asyncio
    async def test_saved_filter_limit(self, registry, repository):
        service = FilterConfigService(registry, repository=repository, settings=FilterSettings(max_saved_filters=1))
        await service.save_filter("One", None, WORK_FILTER)

        with pytest.raises(SavedFilterLimitError):
            await service.save_filter("Two", None, WORK_FILTER)

    @pytest.mark.asyncio
    async def test_update_merges_fields(self, service):
        saved = await service.save_filter("Work", "old", WORK_FILTER, icon="briefcase")
        new_config = {"type": "TAG", "tags": ["work"], "excludeTags": ["archived"]}

        updated = await service.update_filter(saved.metadata.id, description="new", config=new_config)

        assert updated.metadata.name == "Work"
        assert updated.metadata.description == "new"
        assert updated.metadata.icon == "briefcase"
        assert updated.metadata.created_at == saved.metadata.created_at
        assert updated.config == new_config
        assert (await service.get_filter_by_id(saved.metadata.id)).metadata.description == "new"

    @pytest.mark.asyncio
    async def test_update_missing_filter(self, service):
        with pytest.raises(FilterNotFoundError, match="Filter with ID 'nope' not found"):
            await service.update_filter("nope", name="x")

    @pytest.mark.asyncio
    async def test_update_rejects_invalid_config(self, service):
        saved = await service.save_filter("Work", None, WORK_FILTER)

        with pytest.raises(InvalidFilterConfigurationError):
            await service.update_filter(saved.metadata.id, config={"type": "TAG", "tags": []})

    @pytest.mark.asyncio
    async def test_presets_cannot_be_updated_or_deleted(self, service, repository):
        with pytest.raises(PresetImmutableError, match="Cannot update built-in preset filters"):
            await service.update_filter("preset:today", name="Mine")
        with pytest.raises(PresetImmutableError, match="Cannot delete built-in preset filters"):
            await service.delete_filter("preset:today")

        assert "update" not in repository.calls
        assert "delete" not in repository.calls

    @pytest.mark.asyncio
    async def test_delete(self, service):
        saved = await service.save_filter("Work", None, WORK_FILTER)

        assert await service.delete_filter(saved.metadata.id)
        assert not await service.delete_filter(saved.metadata.id)


@pytest.mark.unit
class TestQueries:

    @pytest.mark.asyncio
    async def test_all_filters_lists_presets_first(self, service):
        saved = await service.save_filter("Work", None, WORK_FILTER)

        all_filters = await service.get_all_filters()

        assert all_filters[0].metadata.id == "preset:all-notes"
        assert all_filters[-1].metadata.id == saved.metadata.id
        assert [f.metadata.id for f in await service.get_user_filters()] == [saved.metadata.id]

    @pytest.mark.asyncio
    async def test_without_repository_only_presets(self, registry):
        service = FilterConfigService(registry)

        assert len(await service.get_all_filters()) == 7
        assert await service.get_user_filters() == []
        assert await service.get_filter_by_id("some-id") is None

    @pytest.mark.asyncio
    async def test_search_combines_presets_and_saved(self, service):
        await service.save_filter("Weekly review", None, WORK_FILTER)

        names = [f.metadata.name for f in await service.search_filters("week")]

        assert names == ["Created This Week", "Modified This Week", "Weekly review"]

    @pytest.mark.asyncio
    async def test_create_filter_from_saved(self, service, make_note):
        saved = await service.save_filter("Work", None, WORK_FILTER)

        live = await service.create_filter(saved.metadata.id)

        assert live.matches(make_note(tags=["work"]))
        assert not live.matches(make_note(tags=["home"]))

    @pytest.mark.asyncio
    async def test_all_notes_preset_matches_everything(self, service, make_note):
        live = await service.create_filter("preset:all-notes")

        assert isinstance(live, CompositeFilter)
        assert live.matches(make_note(tags=[]))

    @pytest.mark.asyncio
    async def test_create_filter_unknown_id(self, service):
        with pytest.raises(FilterNotFoundError):
            await service.create_filter("missing")


@pytest.mark.unit
class TestImportExport:

    @pytest.mark.asyncio
    async def test_export_everything(self, service):
        saved = await service.save_filter("Work", None, WORK_FILTER)

        result = await service.export_filters()

        assert result.success
        assert result.count == 8
        assert result.filter_ids[-1] == saved.metadata.id
        assert result.filters[-1].config == WORK_FILTER

    @pytest.mark.asyncio
    async def test_export_user_filters_only(self, service):
        saved = await service.save_filter("Work", None, WORK_FILTER)

        result = await service.export_filters(FilterExportOptions(include_presets=False))

        assert result.filter_ids == [saved.metadata.id]

    @pytest.mark.asyncio
    async def test_export_by_id_reports_missing(self, service):
        result = await service.export_filters(FilterExportOptions(filter_ids=["preset:today", "gone"]))

        assert not result.success
        assert result.filter_ids == ["preset:today"]
        assert result.errors == ["Filter not found: gone"]

    @pytest.mark.asyncio
    async def test_import_partial_success(self, service, repository):
        good = {
            "metadata": {"id": "f-1", "name": "Good", "createdAt": 1, "modifiedAt": 1},
            "config": WORK_FILTER,
        }
        bad_config = {
            "metadata": {"id": "f-2", "name": "Bad", "createdAt": 1, "modifiedAt": 1},
            "config": {"type": "TAG", "tags": []},
        }
        malformed = {"metadata": {"name": "No id"}}

        result = await service.import_filters([good, bad_config, malformed])

        assert not result.success
        assert result.count == 1
        assert result.filter_ids == ["f-1"]
        assert len(result.errors) == 2
        assert result.errors[0].startswith("Filter 'Bad': ")
        assert result.errors[1].startswith("Filter #3: invalid record")
        assert set(repository.filters) == {"f-1"}

    @pytest.mark.asyncio
    async def test_import_reports_deeply_nested_record(self, service, repository):
        good = {
            "metadata": {"id": "f-1", "name": "Good", "createdAt": 1, "modifiedAt": 1},
            "config": WORK_FILTER,
        }
        deep = {
            "metadata": {"id": "f-2", "name": "Deep", "createdAt": 1, "modifiedAt": 1},
            "config": nested_composite(1000),
        }

        result = await service.import_filters([good, deep])

        assert result.filter_ids == ["f-1"]
        assert result.errors == ["Filter 'Deep': Filter nesting depth 1000 exceeds maximum 5"]
        assert set(repository.filters) == {"f-1"}

    @pytest.mark.asyncio
    async def test_import_existing_requires_overwrite(self, service, repository):
        saved = await service.save_filter("Work", None, WORK_FILTER)
        record = saved.to_dict()
        record["metadata"]["name"] = "Renamed"

        rejected = await service.import_filters([record])
        accepted = await service.import_filters([record], FilterImportOptions(overwrite=True))

        assert rejected.errors == [f"Filter 'Renamed' already exists (ID: {saved.metadata.id})"]
        assert accepted.success
        assert repository.filters[saved.metadata.id].metadata.name == "Renamed"

    @pytest.mark.asyncio
    async def test_import_skips_presets(self, service, repository):
        exported = await service.export_filters()

        skipped = await service.import_filters(exported.filters, FilterImportOptions(skip_presets=True))
        reported = await service.import_filters(exported.filters)

        assert skipped.success and skipped.count == 0
        assert len(reported.errors) == 7
        assert repository.filters == {}

    @pytest.mark.asyncio
    async def test_import_without_validation(self, service, repository):
        record = {
            "metadata": {"id": "f-9", "name": "Legacy", "createdAt": 1, "modifiedAt": 1},
            "config": {"type": "LEGACY"},
        }

        result = await service.import_filters([record], FilterImportOptions(validate_configs=False))

        assert result.filter_ids == ["f-9"]
        assert "f-9" in repository.filters

    @pytest.mark.asyncio
    async def test_import_requires_repository(self, registry):
        with pytest.raises(RepositoryNotConfiguredError):
            await FilterConfigService(registry).import_filters([])
