import logging
from pathlib import Path
from typing import Callable, Optional

from .. import config
from ..exceptions import DestinationPathError, DeviceIOError, TransferError
from ..models import CopyOutcome, SourceFile


class FileTransfer:
    def __init__(self, chunk_size: int = config.COPY_CHUNK_SIZE):
        self.chunk_size = chunk_size

    def transfer(self,
                 file: SourceFile,
                 dest: Path,
                 on_bytes: Optional[Callable[[int], None]] = None,
                 progress: Optional[str] = None) -> CopyOutcome:
        """
        Copies one file from the device to `dest`.

        An existing destination with exactly the source size counts as a
        previous successful copy and is left untouched. Anything else at
        `dest` (a partial copy from an interrupted run) is overwritten.

        Args:
            on_bytes: Called with the length of every chunk written.
            progress: Progress text prefixed to the "Copying" log line.

        Returns:
            CopyOutcome.COPIED or CopyOutcome.SKIPPED

        Raises:
            DestinationPathError: `dest` has no parent directory.
            TransferError: any I/O failure on either side.
        """
        dest = Path(dest)
        if not dest.name or dest.parent == dest:
            raise DestinationPathError(f"No parent directory for file {file}")

        try:
            if dest.exists() and dest.stat().st_size == file.size:
                logging.warning(f"File {file} already exists and has identical size, skipping")
                return CopyOutcome.SKIPPED

            prefix = f"({progress}) " if progress else ""
            logging.info(f"{prefix}Copying {file} to {dest}...")
            dest.parent.mkdir(parents=True, exist_ok=True)

            with file.open_stream() as src, open(dest, 'wb') as out:
                while chunk := src.read(self.chunk_size):
                    out.write(chunk)
                    if on_bytes:
                        on_bytes(len(chunk))
        except (OSError, DeviceIOError) as e:
            raise TransferError(file.name, str(e)) from e

        return CopyOutcome.COPIED
