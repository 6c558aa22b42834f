from typing import Optional

from .. import config
from ..models import FileType


def classify(file_name: str) -> Optional[FileType]:
    """
    Maps a file name to its media type using the final extension.

    Returns None for unknown extensions and for names without one; callers
    leave those files out of the listing.
    """
    if '.' not in file_name:
        return None

    ext = file_name.rsplit('.', 1)[1].lower()
    ftype = config.EXT_TO_TYPE.get(ext)
    return FileType(ftype) if ftype else None


def copy_priority(file_type: FileType) -> int:
    return file_type.copy_priority
