"""
Configuration constants for the media importer.
"""
import os
from pathlib import Path

# --- File Type Definitions ---
IMAGE_EXTS = {'jpg', 'jpeg', 'heic', 'heif', 'png', 'gif', 'bmp', 'tif', 'tiff'}
RAW_EXTS = {'raw', 'dng', 'raf', 'crw', 'cr2', 'cr3', 'arw', 'srf', 'sr2', 'rw2', 'nef', 'nrw'}
VIDEO_EXTS = {'mp4', 'mov', 'avi', 'mkv', 'wmv', 'flv', 'webm', 'm4v'}

# Extension to Type Mapping
# Keys carry no leading dot, the classifier splits on the last '.' itself
EXT_TO_TYPE = {}
for ext in IMAGE_EXTS: EXT_TO_TYPE[ext] = 'image'
for ext in RAW_EXTS: EXT_TO_TYPE[ext] = 'raw'
for ext in VIDEO_EXTS: EXT_TO_TYPE[ext] = 'video'

# Files we most likely want first are copied first
COPY_PRIORITY = {
    'image': 0,
    'raw': 1,
    'video': 2,
}

# --- Organization ---
TYPE_DIRS = {
    'image': "Out-of-camera",
    'raw': "Undeveloped",
    'video': "Video",
}
YEAR_FORMAT = "%Y"
ALBUM_DATE_FORMAT = "%Y-%m-%d"

# --- Transfer ---
COPY_CHUNK_SIZE = 1024 * 1024  # 1 MB chunks for streamed copies

# --- Mounted Devices ---
# Where desktop environments expose MTP/PTP devices as folders (gvfs, jmtpfs)
DEFAULT_MOUNT_ROOTS = [
    Path(f"/run/user/{os.getuid()}/gvfs") if hasattr(os, "getuid") else Path("/run/user/gvfs"),
    Path("/media") / Path.home().name,
    Path("/mnt"),
]

# --- Logging ---
LOG_FILE_NAME = "mtp_importer.log"
