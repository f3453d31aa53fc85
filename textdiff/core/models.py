"""
Data models for the text comparison engine.

These dataclasses define the structured values passed through the diff
pipeline. They are immutable and built fresh on every call, so a finished
DiffResult can be cached, serialized or shared without copying.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple
from enum import Enum


class Granularity(Enum):
    """
    Unit into which text is split before comparison.

    - CHARACTER: One token per Unicode code point
    - WORD: Whitespace-separated words (whitespace itself is discarded)
    - LINE: Lines split on \\n or \\r\\n (default)
    - SENTENCE: Sentence bodies and their ". " style separators
    - PARAGRAPH: Blocks separated by one or more blank lines
    """
    CHARACTER = "character"
    WORD = "word"
    LINE = "line"
    SENTENCE = "sentence"
    PARAGRAPH = "paragraph"


class ChangeType(Enum):
    """Classification of a single entry in a diff result."""
    UNCHANGED = "unchanged"
    ADDED = "added"        # Present in modified text only
    REMOVED = "removed"    # Present in original text only
    MODIFIED = "modified"  # Paired substitution


class OptionsError(ValueError):
    """Raised when diff options fall outside their declared domains."""
    pass


# Default threshold used to pick explanation wording for modified pairs.
# It never suppresses a change.
DEFAULT_SIMILARITY_THRESHOLD = 0.5


@dataclass(frozen=True)
class DiffOptions:
    """
    Configuration for a diff operation.

    Attributes:
        granularity: Tokenization unit (default: LINE)
        ignore_whitespace: Collapse whitespace runs before comparing
        ignore_case: Compare tokens case-insensitively
        semantic_analysis: Score modified pairs and explain them
        similarity_threshold: Explanation wording threshold (0-1)
    """
    granularity: Granularity = Granularity.LINE
    ignore_whitespace: bool = False
    ignore_case: bool = False
    semantic_analysis: bool = False
    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD

    @classmethod
    def from_mapping(cls, raw: Optional[Mapping[str, Any]]) -> "DiffOptions":
        """
        Build options from a loosely-typed mapping, validating every value.

        This is the validation boundary for callers that receive options
        from JSON, query strings or UI widgets. Both camelCase and
        snake_case keys are accepted. Missing keys take their defaults.

        Args:
            raw: Mapping of option names to values (None means all defaults)

        Returns:
            A validated DiffOptions instance

        Raises:
            OptionsError: On unknown keys, unknown granularity, non-boolean
                flags or a threshold outside [0, 1]
        """
        if raw is None:
            return cls()

        values: Dict[str, Any] = {}
        for key, value in raw.items():
            name = _OPTION_ALIASES.get(key)
            if name is None:
                raise OptionsError(f"Unknown option: {key}")
            values[name] = value

        if "granularity" in values:
            granularity = values["granularity"]
            if not isinstance(granularity, Granularity):
                try:
                    granularity = Granularity(granularity)
                except ValueError:
                    raise OptionsError(f"Invalid granularity: {granularity!r}")
            values["granularity"] = granularity

        for flag in ("ignore_whitespace", "ignore_case", "semantic_analysis"):
            if flag in values and not isinstance(values[flag], bool):
                raise OptionsError(f"Option '{flag}' must be a boolean")

        if "similarity_threshold" in values:
            threshold = values["similarity_threshold"]
            if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
                raise OptionsError("Option 'similarity_threshold' must be a number")
            if not 0.0 <= threshold <= 1.0:
                raise OptionsError(
                    f"Option 'similarity_threshold' must be in [0, 1], got {threshold}"
                )
            values["similarity_threshold"] = float(threshold)

        return cls(**values)

    def cache_key_fields(self) -> Dict[str, Any]:
        """Options that affect the change list, for building cache keys."""
        return {
            "granularity": self.granularity.value,
            "ignoreWhitespace": self.ignore_whitespace,
            "ignoreCase": self.ignore_case,
        }


_OPTION_ALIASES = {
    "granularity": "granularity",
    "ignoreWhitespace": "ignore_whitespace",
    "ignore_whitespace": "ignore_whitespace",
    "ignoreCase": "ignore_case",
    "ignore_case": "ignore_case",
    "semanticAnalysis": "semantic_analysis",
    "semantic_analysis": "semantic_analysis",
    "similarityThreshold": "similarity_threshold",
    "similarity_threshold": "similarity_threshold",
}

DEFAULT_DIFF_OPTIONS = DiffOptions()


@dataclass(frozen=True)
class KeyWords:
    """
    Significant words that differ between the two sides of a modified pair.

    Attributes:
        added: Words present only in the modified text
        removed: Words present only in the original text
    """
    added: Tuple[str, ...] = ()
    removed: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ChangeRecord:
    """
    One classified entry in a diff result.

    Which text fields are set depends on the change type:
    UNCHANGED and MODIFIED carry both, REMOVED only the original,
    ADDED only the modified.

    Attributes:
        change_type: Classification of this entry
        original: Token text from the original side (display form)
        modified: Token text from the modified side (display form)
        original_line: 1-indexed line in the original (LINE granularity only)
        modified_line: 1-indexed line in the modified (LINE granularity only)
        similarity: Lexical similarity 0-1 (MODIFIED with semantic analysis)
        explanation: Human-readable description of the modification
        key_words: Added/removed significant words
    """
    change_type: ChangeType
    original: Optional[str] = None
    modified: Optional[str] = None
    original_line: Optional[int] = None
    modified_line: Optional[int] = None
    similarity: Optional[float] = None
    explanation: Optional[str] = None
    key_words: Optional[KeyWords] = None

    @property
    def is_change(self) -> bool:
        """Whether this entry is anything other than UNCHANGED."""
        return self.change_type != ChangeType.UNCHANGED

    @property
    def span_length(self) -> int:
        """Length of the longer side of this entry."""
        return max(len(self.original or ""), len(self.modified or ""))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON wire shape, omitting absent fields."""
        data: Dict[str, Any] = {"type": self.change_type.value}
        if self.original is not None:
            data["original"] = self.original
        if self.modified is not None:
            data["modified"] = self.modified
        if self.original_line is not None:
            data["originalLine"] = self.original_line
        if self.modified_line is not None:
            data["modifiedLine"] = self.modified_line
        if self.similarity is not None:
            data["similarity"] = self.similarity
        if self.explanation is not None:
            data["explanation"] = self.explanation
        if self.key_words is not None:
            data["keyWords"] = {
                "added": list(self.key_words.added),
                "removed": list(self.key_words.removed),
            }
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ChangeRecord":
        """Inverse of to_dict()."""
        key_words = data.get("keyWords")
        return cls(
            change_type=ChangeType(data["type"]),
            original=data.get("original"),
            modified=data.get("modified"),
            original_line=data.get("originalLine"),
            modified_line=data.get("modifiedLine"),
            similarity=data.get("similarity"),
            explanation=data.get("explanation"),
            key_words=KeyWords(
                added=tuple(key_words.get("added", ())),
                removed=tuple(key_words.get("removed", ())),
            ) if key_words is not None else None,
        )


@dataclass(frozen=True)
class DiffStats:
    """Per-type counts over a change list."""
    added: int = 0
    removed: int = 0
    modified: int = 0
    unchanged: int = 0

    @property
    def total(self) -> int:
        """Number of entries counted, equal to len(changes)."""
        return self.added + self.removed + self.modified + self.unchanged

    @property
    def total_changes(self) -> int:
        """Entries that are not UNCHANGED."""
        return self.added + self.removed + self.modified

    @classmethod
    def from_changes(cls, changes: Iterable[ChangeRecord]) -> "DiffStats":
        """Count each change type in a sequence of records."""
        counts = {change_type: 0 for change_type in ChangeType}
        for change in changes:
            counts[change.change_type] += 1
        return cls(
            added=counts[ChangeType.ADDED],
            removed=counts[ChangeType.REMOVED],
            modified=counts[ChangeType.MODIFIED],
            unchanged=counts[ChangeType.UNCHANGED],
        )

    def __add__(self, other: "DiffStats") -> "DiffStats":
        """Combine counts from two change lists, e.g. consecutive chunks."""
        if not isinstance(other, DiffStats):
            return NotImplemented
        return DiffStats(
            added=self.added + other.added,
            removed=self.removed + other.removed,
            modified=self.modified + other.modified,
            unchanged=self.unchanged + other.unchanged,
        )

    def as_dict(self) -> Dict[str, int]:
        return {
            "added": self.added,
            "removed": self.removed,
            "modified": self.modified,
            "unchanged": self.unchanged,
        }


@dataclass(frozen=True)
class DiffResult:
    """
    Complete result of comparing two texts.

    This is the primary return type from diff(). Its stats always
    agree with its change list: stats.total == len(changes).

    Attributes:
        changes: Ordered change records
        stats: Aggregate counts per change type
    """
    changes: Tuple[ChangeRecord, ...] = ()
    stats: DiffStats = field(default_factory=DiffStats)

    @classmethod
    def from_changes(cls, changes: Iterable[ChangeRecord]) -> "DiffResult":
        """Build a result whose stats are counted from the given changes."""
        changes = tuple(changes)
        return cls(changes=changes, stats=DiffStats.from_changes(changes))

    @property
    def has_changes(self) -> bool:
        """Whether any entry is added, removed or modified."""
        return self.stats.total_changes > 0

    def get_changes_of_type(self, change_type: ChangeType) -> List[ChangeRecord]:
        """Return entries of a single change type, in order."""
        return [c for c in self.changes if c.change_type == change_type]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "changes": [change.to_dict() for change in self.changes],
            "stats": self.stats.as_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DiffResult":
        """Inverse of to_dict(). Stats are recounted from the changes."""
        return cls.from_changes(ChangeRecord.from_dict(c) for c in data.get("changes", ()))
