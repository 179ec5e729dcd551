from notefilter.models.notes import Note, NoteWithContent
from notefilter.models.saved_filters import (
    FilterConfigImportExportResult,
    FilterConfigValidationResult,
    FilterExportOptions,
    FilterImportOptions,
    SavedFilter,
    SavedFilterMetadata,
)

__all__ = [
    "Note",
    "NoteWithContent",
    "FilterConfigImportExportResult",
    "FilterConfigValidationResult",
    "FilterExportOptions",
    "FilterImportOptions",
    "SavedFilter",
    "SavedFilterMetadata",
]
