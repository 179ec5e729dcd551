"""
Filter contract shared by every concrete filter.

Filters are configuration-driven predicates over notes:
- applying a filter returns a new list and never mutates its input
- a filter serializes back to the plain ``FilterConfig`` it was built from
- filters compose (see CompositeFilter)
"""

import copy
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping

from notefilter.models.notes import Note, NoteWithContent

# Serializable filter configuration: a "type" discriminator plus type-specific fields
FilterConfig = Dict[str, Any]


@dataclass
class FilterValidationResult:
    """Result of filter validation"""
    is_valid: bool
    errors: List[str] = field(default_factory=list)


def validation_success() -> FilterValidationResult:
    return FilterValidationResult(is_valid=True, errors=[])


def validation_failure(errors: List[str]) -> FilterValidationResult:
    return FilterValidationResult(is_valid=False, errors=list(errors))


def validation_result(errors: List[str]) -> FilterValidationResult:
    return validation_success() if not errors else validation_failure(errors)


def to_plain(value: Any) -> Any:
    """Deep copy a config value, replacing enum members with their values"""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Mapping):
        return {str(k): to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    return copy.deepcopy(value)


class BaseFilter(ABC):
    """
    Abstract base class for all note filters.

    Subclasses own a private copy of their configuration and are treated as
    immutable once constructed; ``clone()`` returns an independent deep copy.
    """

    # Type discriminator written to the "type" field of serialized configs
    filter_type: str = ""

    def apply(self, notes: Iterable[Note]) -> List[Note]:
        """Return the notes that match this filter, in input order."""
        return [note for note in notes if self.matches(note)]

    def apply_with_content(self, notes: Iterable[NoteWithContent]) -> List[NoteWithContent]:
        """Return the notes (with content) that match this filter, in input order."""
        return [note for note in notes if self.matches_with_content(note)]

    @abstractmethod
    def serialize(self) -> FilterConfig:
        """Return a plain, JSON-compatible copy of this filter's configuration"""

    @abstractmethod
    def validate(self) -> FilterValidationResult:
        """Check the configuration; never raises"""

    @abstractmethod
    def get_description(self) -> str:
        """Human-readable description, e.g. "Notes tagged with any of: 'work'" """

    @abstractmethod
    def clone(self) -> "BaseFilter":
        """Independent deep copy with the same configuration"""

    @abstractmethod
    def matches(self, note: Note) -> bool:
        """Metadata-only match"""

    @abstractmethod
    def matches_with_content(self, note: NoteWithContent) -> bool:
        """Match using the note body as well as its metadata"""

    def to_json(self) -> str:
        return json.dumps(self.serialize())

    def is_valid(self) -> bool:
        return self.validate().is_valid

    def get_validation_errors(self) -> List[str]:
        return self.validate().errors

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.serialize()!r})"


# Builds a filter from a config; the registry's create_from_config has this shape
FilterFactory = Callable[[FilterConfig], BaseFilter]
