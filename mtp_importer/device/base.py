"""
Read-only capability the importer needs from a portable device backend.

Nodes are opaque handles. The core never inspects them, it only passes them
back to the capability that produced them.
"""
from typing import Any, BinaryIO, List, Optional, Protocol

from ..models import NodeProperties


class DeviceCapability(Protocol):

    def list_devices(self) -> List[str]:
        """Friendly names of the attached devices."""
        ...

    def open_device(self, name: Optional[str] = None) -> Any:
        """
        Opens the named device, or the first one available.

        Raises:
            DeviceNotFoundError: nothing attached, or no device called `name`.
        """
        ...

    def resolve_node(self, device: Any, path: Optional[str] = None) -> Any:
        """
        Returns the device root, or the node at a slash separated path under it.

        Raises:
            PathNotFoundError: `path` does not exist on the device.
        """
        ...

    def children(self, node: Any) -> List[Any]:
        ...

    def name(self, node: Any) -> str:
        ...

    def read_properties(self, node: Any) -> NodeProperties:
        ...

    def open_read_stream(self, node: Any) -> BinaryIO:
        ...
