import logging
from collections import Counter
from functools import partial
from typing import Any, Iterable, List, Optional

from ..device.base import DeviceCapability
from ..exceptions import DeviceIOError, EnumerationError
from ..models import FileType, ListingSummary, SourceFile
from .classifier import classify, copy_priority


class DeviceScanner:
    def __init__(self, device: DeviceCapability):
        self.device = device

    def enumerate(self, root: Any, root_path: Optional[str] = None) -> List[SourceFile]:
        """
        Depth-first walk of everything below `root`.

        Every node is classified by name and emitted when it is a known media
        type with a readable size. Every node is also descended into, since
        the object tree does not tell folders and files apart.

        Args:
            root_path: Path the root was resolved from, used as the prefix of
                       every emitted path. None means the device root.

        Raises:
            EnumerationError: a node's children or properties could not be read.
        """
        files = []
        prefix = root_path.rstrip("/") if root_path else None

        # (node, parent path) pairs; reversed so siblings come off in order
        stack = [(child, prefix) for child in reversed(self._children(root))]
        while stack:
            node, parent_path = stack.pop()

            name = self._name(node)
            path = f"{parent_path}/{name}" if parent_path else name

            record = self._process_node(node, name, path)
            if record:
                logging.debug(f"Found file: {record}")
                files.append(record)

            for child in reversed(self._children(node)):
                stack.append((child, path))

        return files

    def _children(self, node: Any) -> List[Any]:
        try:
            return list(self.device.children(node))
        except DeviceIOError as e:
            raise EnumerationError(f"Failed to list children: {e}") from e

    def _name(self, node: Any) -> str:
        try:
            return self.device.name(node)
        except DeviceIOError as e:
            raise EnumerationError(f"Failed to read name: {e}") from e

    def _process_node(self, node: Any, name: str, path: str) -> Optional[SourceFile]:
        try:
            props = self.device.read_properties(node)
        except DeviceIOError as e:
            raise EnumerationError(f"Failed to read properties of {path}: {e}") from e

        ftype = classify(name)
        if ftype is None or props.size is None:
            return None

        return SourceFile(
            node=node,
            name=name,
            path=path,
            file_type=ftype,
            size=props.size,
            authored=props.authored,
            opener=partial(self.device.open_read_stream, node),
        )


def sort_listing(files: Iterable[SourceFile]) -> List[SourceFile]:
    """Orders files by copy priority, then name. Stable, so re-sorting is a no-op."""
    return sorted(files, key=lambda f: (copy_priority(f.file_type), f.name))


def summarize_listing(files: List[SourceFile]) -> ListingSummary:
    counts = Counter(f.file_type for f in files)
    return ListingSummary(
        total_files=len(files),
        total_size=sum(f.size for f in files),
        per_type={ftype: counts.get(ftype, 0) for ftype in FileType},
    )
