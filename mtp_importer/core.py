import logging
import time
from datetime import date
from pathlib import Path
from typing import Callable, List, Optional

from tqdm import tqdm

from .device.base import DeviceCapability
from .exceptions import TransferError
from .models import CopyOutcome, RunStatistics, RunSummary, SourceFile
from .organization.rules import build_destination_path, resolve_reference_date
from .organization.transfer import FileTransfer
from .reporting import format_listing_summary, format_progress, format_run_summary
from .scanning.enumerator import DeviceScanner, sort_listing, summarize_listing


class BatchCopier:
    """
    Copies a sorted listing one file at a time and keeps the run statistics.

    Percentages and ETA are for display only; nothing here branches on them.
    """

    def __init__(self,
                 transfer: Optional[FileTransfer] = None,
                 show_progress: bool = False,
                 clock: Callable[[], float] = time.monotonic):
        self.transfer = transfer or FileTransfer()
        self.show_progress = show_progress
        self.clock = clock

    def run(self,
            files: List[SourceFile],
            target_root: Path,
            reference_date: date,
            album_name: Optional[str] = None,
            keep_going: bool = False) -> RunSummary:
        """
        Args:
            keep_going: Log failed files and carry on. When False the first
                        TransferError aborts the run and is re-raised; files
                        already copied stay on disk and are skipped next time.
        """
        stats = RunStatistics.for_files(files, started_at=self.clock())

        bar = tqdm(total=stats.remaining_size, unit="B", unit_scale=True, unit_divisor=1024,
                   desc="Copying", disable=not self.show_progress)
        try:
            for file in files:
                dest = build_destination_path(
                    target_root, file.name, file.file_type.out_dir, reference_date, album_name
                )

                elapsed = self.clock() - stats.started_at
                progress_str = format_progress(stats.progress(), stats.eta_seconds(elapsed))

                written = 0

                def on_bytes(n: int):
                    nonlocal written
                    written += n
                    bar.update(n)

                error = None
                try:
                    outcome = self.transfer.transfer(file, dest, on_bytes=on_bytes, progress=progress_str)
                except TransferError as e:
                    outcome = CopyOutcome.ERRORED
                    error = e

                stats.record(file, outcome)
                if outcome is not CopyOutcome.COPIED:
                    self._drop_from_bar(bar, file.size, written)

                if error is not None:
                    if not keep_going:
                        raise error
                    logging.error(f"Error copying file {file.name}: {error}")
        finally:
            bar.close()

        return RunSummary.from_statistics(stats, elapsed_seconds=self.clock() - stats.started_at)

    def _drop_from_bar(self, bar: tqdm, size: int, written: int):
        # Resolved-but-not-copied files leave the bar's total, like remaining_size
        bar.total = max(bar.total - size, 0)
        bar.n = max(bar.n - written, 0)
        bar.refresh()


class MediaImporterApp:
    def __init__(self, device: DeviceCapability, transfer: Optional[FileTransfer] = None):
        self.device = device
        self.transfer = transfer or FileTransfer()

    def list_devices(self) -> List[str]:
        devices = self.device.list_devices()
        logging.info(f"Found {len(devices)} MTP devices")
        return devices

    def list_files(self,
                   device_name: Optional[str] = None,
                   source_path: Optional[str] = None) -> List[SourceFile]:
        """
        Enumerates and sorts every media file under `source_path` (or the
        device root) on the named device (or the first one).
        """
        handle = self.device.open_device(device_name)
        root = self.device.resolve_node(handle, source_path)

        logging.info(f"Gathering files list from {source_path or 'device root'}...")
        scanner = DeviceScanner(self.device)
        files = sort_listing(scanner.enumerate(root, source_path))

        logging.info(format_listing_summary(summarize_listing(files)))
        return files

    def copy_batch(self,
                   target_root: Path,
                   device_name: Optional[str] = None,
                   source_path: Optional[str] = None,
                   reference_date: Optional[date] = None,
                   album_name: Optional[str] = None,
                   keep_going: bool = False,
                   show_progress: bool = False) -> RunSummary:
        # One date for the whole run, so every file lands in the same album
        reference_date = resolve_reference_date(reference_date)

        files = self.list_files(device_name, source_path)

        logging.info(f"Copying files to {target_root}")
        copier = BatchCopier(self.transfer, show_progress=show_progress)
        summary = copier.run(files, Path(target_root), reference_date, album_name, keep_going)

        for line in format_run_summary(summary):
            logging.info(line)
        return summary
