from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, BinaryIO, Callable, Dict, List, Optional, Tuple

from . import config


class FileType(str, Enum):
    IMAGE = 'image'
    RAW_IMAGE = 'raw'
    VIDEO = 'video'

    @property
    def copy_priority(self) -> int:
        return config.COPY_PRIORITY[self.value]

    @property
    def out_dir(self) -> str:
        return config.TYPE_DIRS[self.value]

    @property
    def label(self) -> str:
        return {'image': "Image", 'raw': "Raw image", 'video': "Video"}[self.value]


class CopyOutcome(Enum):
    COPIED = 'copied'
    SKIPPED = 'skipped'
    ERRORED = 'errored'


@dataclass
class NodeProperties:
    """Metadata a device reports for one object node."""
    size: Optional[int] = None
    authored: Optional[datetime] = None


@dataclass(frozen=True)
class SourceFile:
    """
    Represents a media file found on the device during enumeration.
    """
    node: Any               # opaque handle owned by the device capability
    name: str
    path: str               # slash-joined ancestry, e.g. DCIM/Camera/IMG_1.jpg
    file_type: FileType
    size: int
    authored: Optional[datetime] = None

    opener: Optional[Callable[[], BinaryIO]] = field(default=None, repr=False, compare=False)

    def open_stream(self) -> BinaryIO:
        if self.opener is None:
            raise RuntimeError(f"No stream opener attached to {self.path}")
        return self.opener()

    def __str__(self) -> str:
        return f"{self.path} ({self.file_type.label}): {self.size} B"


@dataclass
class RunStatistics:
    """
    Accumulator for a single batch copy.

    Progress is measured against remaining_size, which shrinks whenever a
    file is skipped or errors, so resolved files leave the denominator.
    """
    total_files: int
    original_size: int
    remaining_size: int
    started_at: float
    copied_size: int = 0
    copied_files: int = 0
    skipped_files: int = 0
    errored_files: List[str] = field(default_factory=list)

    @classmethod
    def for_files(cls, files: List[SourceFile], started_at: float) -> "RunStatistics":
        total_size = sum(f.size for f in files)
        return cls(
            total_files=len(files),
            original_size=total_size,
            remaining_size=total_size,
            started_at=started_at,
        )

    def record_copied(self, file: SourceFile):
        self.copied_size += file.size
        self.copied_files += 1

    def record_skipped(self, file: SourceFile):
        self.remaining_size -= file.size
        self.skipped_files += 1

    def record_errored(self, file: SourceFile):
        self.remaining_size -= file.size
        self.errored_files.append(file.name)

    def record(self, file: SourceFile, outcome: CopyOutcome):
        if outcome is CopyOutcome.COPIED:
            self.record_copied(file)
        elif outcome is CopyOutcome.SKIPPED:
            self.record_skipped(file)
        else:
            self.record_errored(file)

    def progress(self) -> float:
        """Percentage of the remaining bytes copied so far."""
        if self.remaining_size <= 0:
            return 0.0
        return self.copied_size / self.remaining_size * 100.0

    def eta_seconds(self, elapsed: float) -> Optional[float]:
        progress = self.progress()
        if progress <= 0:
            return None
        return elapsed / progress * (100.0 - progress)


@dataclass(frozen=True)
class RunSummary:
    total_files: int
    copied_files: int
    skipped_files: int
    errored_files: Tuple[str, ...]
    original_size: int
    remaining_size: int
    copied_size: int
    elapsed_seconds: float

    @property
    def errored_count(self) -> int:
        return len(self.errored_files)

    @property
    def throughput(self) -> float:
        """Average bytes per second; 0 for runs shorter than one second."""
        if self.elapsed_seconds < 1:
            return 0.0
        return self.copied_size / self.elapsed_seconds

    @classmethod
    def from_statistics(cls, stats: RunStatistics, elapsed_seconds: float) -> "RunSummary":
        return cls(
            total_files=stats.total_files,
            copied_files=stats.copied_files,
            skipped_files=stats.skipped_files,
            errored_files=tuple(stats.errored_files),
            original_size=stats.original_size,
            remaining_size=stats.remaining_size,
            copied_size=stats.copied_size,
            elapsed_seconds=elapsed_seconds,
        )


@dataclass
class ListingSummary:
    total_files: int
    total_size: int
    per_type: Dict[FileType, int]
