"""Configuration for parallel range searches."""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

EXECUTORS = ("thread", "process")


@dataclass
class SearchConfig:
    """Configuration for ``parallel_range_compute``.

    Attributes:
        search_size_limit: How far beyond the frontier to search.
        chunk_size_limit: Maximum width of each concurrently searched chunk.
        max_workers: Worker count; None uses the executor's default.
        executor: "thread" or "process".
        show_progress: Show a tqdm progress bar while chunks complete.
    """

    search_size_limit: int = 100_000
    chunk_size_limit: int = 10_000
    max_workers: Optional[int] = None
    executor: str = "thread"
    show_progress: bool = False

    def __post_init__(self):
        if self.search_size_limit < 1:
            raise ValueError(f"search_size_limit must be >= 1, got {self.search_size_limit}")
        if self.chunk_size_limit < 1:
            raise ValueError(f"chunk_size_limit must be >= 1, got {self.chunk_size_limit}")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.executor not in EXECUTORS:
            raise ValueError(f"executor must be one of {EXECUTORS}, got {self.executor!r}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'SearchConfig':
        return cls(**{k: v for k, v in d.items() if k in cls.__dataclass_fields__})
