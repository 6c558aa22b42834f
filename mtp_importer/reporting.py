"""
Human-readable rendering of listings and run summaries.
"""
from typing import List, Optional

from tqdm import tqdm

from .models import FileType, ListingSummary, RunSummary, SourceFile


def format_size(num_bytes: float) -> str:
    return tqdm.format_sizeof(num_bytes, suffix="B", divisor=1024)


def format_eta(seconds: Optional[float]) -> str:
    if seconds is None:
        return "N/A"
    return tqdm.format_interval(int(seconds))


def format_progress(progress: float, eta_seconds: Optional[float]) -> str:
    return f"{progress:.2f}% ETA: {format_eta(eta_seconds)}"


def format_file_line(file: SourceFile) -> str:
    return f"{file.path} ({file.file_type.label}): {format_size(file.size)}"


def format_listing_summary(summary: ListingSummary) -> str:
    return (
        f"Found {summary.total_files} files, totalling {format_size(summary.total_size)} "
        f"({summary.per_type.get(FileType.IMAGE, 0)} photos, "
        f"{summary.per_type.get(FileType.RAW_IMAGE, 0)} RAW files, "
        f"{summary.per_type.get(FileType.VIDEO, 0)} videos)"
    )


def format_run_summary(summary: RunSummary) -> List[str]:
    lines = [
        "All done!",
        f"Copied {summary.copied_files} files ({format_size(summary.copied_size)}) "
        f"of {summary.total_files} ({format_size(summary.original_size)}) "
        f"({summary.skipped_files} files skipped, {summary.errored_count} failed) "
        f"in {tqdm.format_interval(int(summary.elapsed_seconds))}",
        f"Effective speed: {format_size(summary.throughput)}/s",
    ]

    if summary.errored_files:
        lines.append("The following files failed to copy:")
        lines.extend(summary.errored_files)

    return lines
