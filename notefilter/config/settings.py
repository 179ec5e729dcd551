"""
Filter engine settings.

Limits default to FilterConfigConstants and can be overridden through
NOTEFILTER_* environment variables (a local .env file is honoured).
"""

import os

import dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

from notefilter.config.constants.filters import FilterConfigConstants

ENV_PREFIX = "NOTEFILTER_"


class FilterSettings(BaseModel):
    """Runtime limits and logging options for the filter engine."""

    max_nesting_depth: int = Field(
        default=FilterConfigConstants.MAX_NESTING_DEPTH,
        description="Composite nesting depth above which a config is rejected",
    )
    nesting_warning_depth: int = Field(
        default=FilterConfigConstants.NESTING_WARNING_DEPTH,
        description="Composite nesting depth above which a warning is reported",
    )
    max_composite_filters: int = Field(
        default=FilterConfigConstants.MAX_COMPOSITE_FILTERS,
        description="Maximum direct children of a single composite",
    )
    max_saved_filters: int = Field(
        default=FilterConfigConstants.MAX_SAVED_FILTERS,
        description="Maximum number of user filters held by the repository",
    )
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("max_nesting_depth", "max_composite_filters", "max_saved_filters")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Limit must be a positive integer")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @model_validator(mode="after")
    def validate_warning_depth(self) -> "FilterSettings":
        if self.nesting_warning_depth < 0 or self.nesting_warning_depth >= self.max_nesting_depth:
            raise ValueError(
                "nesting_warning_depth must be non-negative and below max_nesting_depth"
            )
        return self

    @classmethod
    def from_env(cls) -> "FilterSettings":
        """
        Load settings from NOTEFILTER_* environment variables.

        Returns:
            FilterSettings instance with values from environment
        """
        dotenv.load_dotenv()
        return cls(
            max_nesting_depth=int(
                os.getenv(f"{ENV_PREFIX}MAX_NESTING_DEPTH", str(FilterConfigConstants.MAX_NESTING_DEPTH))
            ),
            nesting_warning_depth=int(
                os.getenv(f"{ENV_PREFIX}NESTING_WARNING_DEPTH", str(FilterConfigConstants.NESTING_WARNING_DEPTH))
            ),
            max_composite_filters=int(
                os.getenv(f"{ENV_PREFIX}MAX_COMPOSITE_FILTERS", str(FilterConfigConstants.MAX_COMPOSITE_FILTERS))
            ),
            max_saved_filters=int(
                os.getenv(f"{ENV_PREFIX}MAX_SAVED_FILTERS", str(FilterConfigConstants.MAX_SAVED_FILTERS))
            ),
            log_level=os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO"),
        )


def get_settings() -> FilterSettings:
    """
    Build settings from the current environment.

    The container keeps the process-wide instance; this helper always reads
    the environment afresh.
    """
    return FilterSettings.from_env()
