import os
import logging
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Iterable, List, Optional

from .. import config
from ..exceptions import DeviceIOError, DeviceNotFoundError, PathNotFoundError
from ..models import NodeProperties


class MountedDeviceCapability:
    """
    Device backend for devices the OS already exposes as mounted folders.

    Every directory directly below a mount root (gvfs, jmtpfs, ...) is a
    device, and its filesystem tree is the object tree. Nodes are Paths.
    """

    def __init__(self, mount_roots: Optional[Iterable[Path]] = None):
        roots = mount_roots if mount_roots is not None else config.DEFAULT_MOUNT_ROOTS
        self.mount_roots = [Path(r) for r in roots]

    def _device_dirs(self) -> List[Path]:
        devices = []
        for root in self.mount_roots:
            try:
                with os.scandir(root) as it:
                    entries = sorted(it, key=lambda e: e.name.lower())
            except (OSError, PermissionError):
                logging.debug(f"Mount root unavailable: {root}")
                continue

            for e in entries:
                if e.is_dir(follow_symlinks=True):
                    devices.append(Path(e.path))
        return devices

    def list_devices(self) -> List[str]:
        return [d.name for d in self._device_dirs()]

    def open_device(self, name: Optional[str] = None) -> Path:
        devices = self._device_dirs()

        if name is None:
            if not devices:
                raise DeviceNotFoundError("No MTP devices found")
            return devices[0]

        for device in devices:
            if device.name == name:
                return device
        raise DeviceNotFoundError(f"No device with name {name} found")

    def resolve_node(self, device: Path, path: Optional[str] = None) -> Path:
        if not path:
            return device

        node = device.joinpath(*[part for part in path.split("/") if part])
        if not node.exists():
            raise PathNotFoundError(f"Path {path} not found on device {device.name}")
        return node

    def children(self, node: Path) -> List[Path]:
        if not node.is_dir():
            return []
        try:
            with os.scandir(node) as it:
                entries = list(it)
        except OSError as e:
            raise DeviceIOError(f"Cannot list {node}: {e}") from e

        # Sort for stable traversal order
        entries.sort(key=lambda e: e.name)
        return [Path(e.path) for e in entries]

    def name(self, node: Path) -> str:
        return node.name

    def read_properties(self, node: Path) -> NodeProperties:
        try:
            stat_result = node.stat()
        except OSError as e:
            raise DeviceIOError(f"Cannot read properties of {node}: {e}") from e

        # Folders have no object size
        size = stat_result.st_size if node.is_file() else None
        return NodeProperties(size=size, authored=datetime.fromtimestamp(stat_result.st_mtime))

    def open_read_stream(self, node: Path) -> BinaryIO:
        try:
            return open(node, 'rb')
        except OSError as e:
            raise DeviceIOError(f"Cannot open {node}: {e}") from e
