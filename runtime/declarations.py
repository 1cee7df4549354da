# Ethan Doughty
# declarations.py
"""Declaration table: identifier name -> first-seen declared type and line."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional


@dataclass(frozen=True)
class Declaration:
    name: str
    declared_type: Optional[str]  # None = unresolved (Kotlin `var x = ...`)
    line: int

    def type_label(self) -> str:
        return self.declared_type if self.declared_type is not None else "UNKNOWN"


@dataclass
class DeclarationTable:
    """Append-only map of declarations for one analysis run.

    The first declaration of a name wins; later ones are ignored. When
    `limit` entries are stored, further new names are counted in `dropped`
    instead of being recorded.
    """
    limit: int = 6000
    entries: Dict[str, Declaration] = field(default_factory=dict)
    dropped: int = 0

    def record(self, name: str, declared_type: Optional[str], line: int) -> bool:
        """Insert a declaration unless the name is already known.

        Returns:
            True if a new entry was stored
        """
        if name in self.entries:
            return False
        if len(self.entries) >= self.limit:
            self.dropped += 1
            return False
        self.entries[name] = Declaration(name=name, declared_type=declared_type, line=line)
        return True

    def lookup(self, name: str) -> Optional[str]:
        """Declared type for name (None if undeclared or unresolved)."""
        decl = self.entries.get(name)
        return decl.declared_type if decl is not None else None

    def get(self, name: str) -> Optional[Declaration]:
        return self.entries.get(name)

    def is_declared(self, name: str) -> bool:
        return name in self.entries

    @property
    def truncated(self) -> bool:
        return self.dropped > 0

    def __contains__(self, name: str) -> bool:
        return name in self.entries

    def __iter__(self) -> Iterator[Declaration]:
        return iter(self.entries.values())

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        parts = [f"{d.name}: {d.type_label()}" for d in self.entries.values()]
        return "Decls{" + ", ".join(parts) + "}"
