from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Tuple


class Status(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    SUCCESS = "success"

    @property
    def rank(self) -> int:
        return _STATUS_RANK[self]

    def __lt__(self, other):
        if not isinstance(other, Status):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Status):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Status):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Status):
            return NotImplemented
        return self.rank >= other.rank


_STATUS_RANK = {Status.ERROR: 0, Status.WARNING: 1, Status.SUCCESS: 2}


@dataclass(frozen=True)
class ImageResult:
    total: int
    status: Status
    images: Tuple[str, ...]      # preview, first 10 after filtering
    message: str


@dataclass(frozen=True)
class SpecResult:
    found: Tuple[str, ...]       # checklist order
    missing: Tuple[str, ...]
    completeness: int            # 0..100
    status: Status
    total: int
    message: str


@dataclass(frozen=True)
class DescriptionResult:
    words: int
    paragraphs: int
    images: int                  # images embedded in the description
    headings: int                # h1-h6 across the whole page
    status: Status
    message: str


@dataclass(frozen=True)
class AnalysisReport:
    category: str
    timestamp: datetime
    images: ImageResult
    specs: SpecResult
    description: DescriptionResult


@dataclass(frozen=True)
class Recommendation:
    type: str                    # 'images' | 'specs' | 'description'
    priority: str                # 'low' | 'medium' | 'high'
    message: str
