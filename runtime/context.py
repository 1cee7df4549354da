# Ethan Doughty
# context.py
"""Run-scoped analysis state (replaces the process-wide token/decl/error buffers)."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Generic, Iterator, List, TypeVar

from runtime.declarations import DeclarationTable

T = TypeVar("T")

DEFAULT_MAX_TOKENS = 16000
DEFAULT_MAX_COMMENTS = 6000
DEFAULT_MAX_DECLARATIONS = 6000
DEFAULT_MAX_DIAGNOSTICS = 6000


@dataclass
class BoundedLog(Generic[T]):
    """Ordered, append-only sequence with a hard cap.

    Appends past `limit` are counted in `dropped` rather than stored, so a
    run never fails on capacity but the caller can see what was lost.
    """
    limit: int
    items: List[T] = field(default_factory=list)
    dropped: int = 0

    def append(self, item: T) -> bool:
        if len(self.items) >= self.limit:
            self.dropped += 1
            return False
        self.items.append(item)
        return True

    @property
    def truncated(self) -> bool:
        return self.dropped > 0

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index):
        return self.items[index]

    def __bool__(self) -> bool:
        return bool(self.items)


@dataclass
class AnalysisContext:
    """State of one analysis run, threaded through scanner and diagnostic pass.

    Fields:
        tokens: Tokens in scan order
        comments: Captured comments in source order
        declarations: Declaration table built while scanning
        diagnostics: Diagnostics in detection order
    """
    max_tokens: int = DEFAULT_MAX_TOKENS
    max_comments: int = DEFAULT_MAX_COMMENTS
    max_declarations: int = DEFAULT_MAX_DECLARATIONS
    max_diagnostics: int = DEFAULT_MAX_DIAGNOSTICS
    source_name: str = "<string>"

    tokens: BoundedLog = field(init=False)
    comments: BoundedLog = field(init=False)
    declarations: DeclarationTable = field(init=False)
    diagnostics: BoundedLog = field(init=False)

    def __post_init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Drop everything recorded by a previous run."""
        self.tokens = BoundedLog(limit=self.max_tokens)
        self.comments = BoundedLog(limit=self.max_comments)
        self.declarations = DeclarationTable(limit=self.max_declarations)
        self.diagnostics = BoundedLog(limit=self.max_diagnostics)

    def truncation(self) -> Dict[str, int]:
        """Dropped-item counts for every store that hit its cap."""
        counts = {
            "tokens": self.tokens.dropped,
            "comments": self.comments.dropped,
            "declarations": self.declarations.dropped,
            "diagnostics": self.diagnostics.dropped,
        }
        return {k: v for k, v in counts.items() if v}

    @property
    def truncated(self) -> bool:
        return bool(self.truncation())
