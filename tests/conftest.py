import io
from dataclasses import dataclass, field
from typing import List, Optional

import pytest

from mtp_importer.exceptions import DeviceIOError, DeviceNotFoundError, PathNotFoundError
from mtp_importer.models import NodeProperties


@dataclass(eq=False)
class FakeNode:
    name: str
    data: Optional[bytes] = None        # None for folders
    children: List["FakeNode"] = field(default_factory=list)
    fail_children: bool = False
    fail_properties: bool = False
    fail_name: bool = False
    fail_read: bool = False


class BrokenStream(io.BytesIO):
    """Yields one chunk, then fails like a dropped USB link."""

    def __init__(self, data: bytes):
        super().__init__(data)
        self._reads = 0

    def read(self, size=-1):
        self._reads += 1
        if self._reads > 1:
            raise OSError("device disconnected")
        return super().read(1)


class FakeDevice:
    """In-memory device capability: {device name: root node}."""

    def __init__(self, devices):
        self.devices = devices
        self.opened_streams = []

    def list_devices(self):
        return list(self.devices)

    def open_device(self, name=None):
        if name is None:
            if not self.devices:
                raise DeviceNotFoundError("No MTP devices found")
            return next(iter(self.devices.values()))
        if name not in self.devices:
            raise DeviceNotFoundError(f"No device with name {name} found")
        return self.devices[name]

    def resolve_node(self, device, path=None):
        node = device
        for part in [p for p in (path or "").split("/") if p]:
            matches = [c for c in node.children if c.name == part]
            if not matches:
                raise PathNotFoundError(f"Path {path} not found")
            node = matches[0]
        return node

    def children(self, node):
        if node.fail_children:
            raise DeviceIOError(f"cannot list {node.name}")
        return list(node.children)

    def name(self, node):
        if node.fail_name:
            raise DeviceIOError("cannot read object name")
        return node.name

    def read_properties(self, node):
        if node.fail_properties:
            raise DeviceIOError(f"cannot read {node.name}")
        return NodeProperties(size=len(node.data) if node.data is not None else None)

    def open_read_stream(self, node):
        self.opened_streams.append(node.name)
        if node.fail_read:
            return BrokenStream(node.data)
        return io.BytesIO(node.data)


def folder(name, *children, **kwargs):
    return FakeNode(name, None, list(children), **kwargs)


def media(name, size, **kwargs):
    return FakeNode(name, bytes([len(name) % 256]) * size, **kwargs)


@pytest.fixture
def camera_tree():
    """A phone-like layout with images, raws, videos and junk."""
    return folder(
        "root",
        folder(
            "DCIM",
            folder(
                "Camera",
                media("VID_0001.mp4", 30),
                media("IMG_0002.jpg", 10),
                media("IMG_0001.DNG", 20),
                media("IMG_0001.jpg", 12),
                media("notes.txt", 5),
            ),
            media(".nomedia", 0),
        ),
        folder("Pictures", media("Screenshot.PNG", 7)),
    )


@pytest.fixture
def fake_device(camera_tree):
    return FakeDevice({"Pixel 7": camera_tree})


@pytest.fixture
def three_files_device():
    """Three files sized 10, 20 and 30 bytes, in that copy order."""
    return FakeDevice({
        "Phone": folder(
            "root",
            folder("DCIM", media("a.jpg", 10), media("b.jpg", 20), media("c.jpg", 30)),
        )
    })
