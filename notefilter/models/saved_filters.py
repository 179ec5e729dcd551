"""
Saved filter records and the result/option models used by the config service.

Field aliases are the camelCase names of the persisted/import-export format;
``to_dict()`` produces that format.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from notefilter.config.constants.filters import FilterConfigConstants


class SavedFilterMetadata(BaseModel):
    """Metadata for a saved filter configuration"""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="Unique identifier")
    name: str = Field(description="User-friendly name")
    description: Optional[str] = Field(default=None, description="Optional description")
    tags: Optional[List[str]] = Field(default=None, description="Tags for categorization")
    created_at: int = Field(alias="createdAt", description="Creation time (unix seconds)")
    modified_at: int = Field(alias="modifiedAt", description="Last modification time (unix seconds)")
    is_preset: bool = Field(default=False, alias="isPreset", description="Built-in, immutable preset")
    icon: Optional[str] = Field(default=None, description="Icon identifier for UI")
    color: Optional[str] = Field(default=None, description="Display color for UI")


class SavedFilter(BaseModel):
    """Complete saved filter: metadata plus the raw filter configuration"""

    model_config = ConfigDict(populate_by_name=True)

    metadata: SavedFilterMetadata
    config: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase wire format"""
        return self.model_dump(by_alias=True, exclude_none=True)


class FilterConfigValidationResult(BaseModel):
    """Validation result for a filter configuration"""

    model_config = ConfigDict(populate_by_name=True)

    is_valid: bool = Field(alias="isValid")
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class FilterExportOptions(BaseModel):
    """Options for exporting filter configurations"""

    model_config = ConfigDict(populate_by_name=True)

    include_presets: bool = Field(default=True, alias="includePresets")
    include_user_filters: bool = Field(default=True, alias="includeUserFilters")
    filter_ids: Optional[List[str]] = Field(default=None, alias="filterIds")
    format: Literal["json"] = Field(default=FilterConfigConstants.DEFAULT_EXPORT_FORMAT, description="Export format")


class FilterImportOptions(BaseModel):
    """Options for importing filter configurations"""

    model_config = ConfigDict(populate_by_name=True)

    overwrite: bool = Field(default=False, description="Replace filters with the same id")
    validate_configs: bool = Field(default=True, alias="validate", description="Validate before importing")
    skip_presets: bool = Field(default=False, alias="skipPresets")


class FilterConfigImportExportResult(BaseModel):
    """Result of importing/exporting filter configurations"""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    count: int
    errors: Optional[List[str]] = None
    filter_ids: List[str] = Field(default_factory=list, alias="filterIds")
    filters: List[SavedFilter] = Field(default_factory=list, description="Exported records")
