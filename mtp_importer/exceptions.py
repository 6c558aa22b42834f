"""
Custom exception hierarchy for the media importer.

Precondition errors (device, source path, destination path) and enumeration
errors are fatal for the whole run. TransferError is per file and the batch
copier decides whether it aborts the run.
"""
from typing import Optional


class MtpImporterError(Exception):
    """Base exception for all media importer errors."""
    pass


class DeviceNotFoundError(MtpImporterError):
    """Raised when no device, or no device with the requested name, is attached."""
    pass


class PathNotFoundError(MtpImporterError):
    """Raised when a source path cannot be resolved under the device root."""
    pass


class DestinationPathError(MtpImporterError):
    """Raised when a destination path has no parent directory."""
    pass


class DeviceIOError(MtpImporterError):
    """Raised by a device capability when the transport fails."""
    pass


class EnumerationError(MtpImporterError):
    """Raised when a node's children or properties cannot be read."""
    pass


class TransferError(MtpImporterError):
    """Raised when copying a single file fails."""

    def __init__(self, file_name: str, reason: Optional[str] = None):
        self.file_name = file_name
        self.reason = reason or "unknown error"
        super().__init__(f"Failed to copy {file_name}: {self.reason}")
