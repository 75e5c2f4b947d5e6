from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union

from .errors import InvalidConfig


@dataclass(frozen=True)
class Marker:
    """Non-string extension key. Never equal to any str, "" included."""
    label: str

    def __str__(self) -> str:
        return self.label


NO_EXTENSION = Marker("N/A")
BEYOND_DEPTH = Marker("**")   # everything under a directory cut off by max_depth

ExtensionKey = Union[str, Marker]


def label(key: ExtensionKey) -> str:
    return key.label if isinstance(key, Marker) else key


@dataclass
class ExtensionStat:
    key: ExtensionKey
    file_count: int = 0
    total_bytes: int = 0

    def add(self, size: int):
        self.file_count += 1
        self.total_bytes += size


@dataclass
class DirNode:
    name: str
    path: str
    depth: int
    stats: Dict[ExtensionKey, ExtensionStat] = field(default_factory=dict)
    children: List["DirNode"] = field(default_factory=list)
    is_empty: bool = False
    truncated: bool = False

    def total_files(self) -> int:
        return sum(s.file_count for s in self.stats.values()) + \
            sum(c.total_files() for c in self.children)

    def total_bytes(self) -> int:
        return sum(s.total_bytes for s in self.stats.values()) + \
            sum(c.total_bytes() for c in self.children)


class SortMode(Enum):
    ALPHABETICALLY = "alphabetically"
    FILE_COUNT = "file-count"
    FILE_SIZE = "file-size"

    @classmethod
    def parse(cls, text: Union[str, "SortMode"]) -> "SortMode":
        if isinstance(text, SortMode):
            return text
        try:
            return cls(text.strip().lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise InvalidConfig(f"unknown sort mode '{text}' (expected one of: {choices})") from None


@dataclass(frozen=True)
class ScanConfig:
    max_depth: Optional[int] = None          # None = unbounded
    show_empty: bool = False
    sort_mode: SortMode = SortMode.FILE_SIZE
    fold_case: bool = False
    follow_symlinks: bool = False

    def __post_init__(self):
        if self.max_depth is not None and self.max_depth < 0:
            raise InvalidConfig(f"max depth must be >= 0, got {self.max_depth}")
        if not isinstance(self.sort_mode, SortMode):
            object.__setattr__(self, "sort_mode", SortMode.parse(self.sort_mode))

    def expands(self, depth: int) -> bool:
        """True if a directory at `depth` is walked entry by entry."""
        return self.max_depth is None or depth <= self.max_depth
