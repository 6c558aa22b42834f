from datetime import date
from pathlib import Path
from typing import Optional

from .. import config


def resolve_reference_date(reference_date: Optional[date] = None) -> date:
    """The album date for a run; today's local date unless one is given."""
    return reference_date if reference_date is not None else date.today()


def album_segment(reference_date: date, album_name: Optional[str] = None) -> str:
    """
    YYYY-MM-DD, followed by a space and the album name when there is one.

    A blank or whitespace-only album name counts as no album, so the
    segment never ends in a stray space.
    """
    segment = reference_date.strftime(config.ALBUM_DATE_FORMAT)
    if album_name and album_name.strip():
        segment = f"{segment} {album_name}"
    return segment


def build_destination_path(target_root: Path,
                           file_name: str,
                           type_dir: str,
                           reference_date: date,
                           album_name: Optional[str] = None) -> Path:
    """
    target_root/type_dir/YYYY/YYYY-MM-DD[ album_name]/file_name

    Pure: nothing is created on disk.
    """
    return (Path(target_root)
            / type_dir
            / reference_date.strftime(config.YEAR_FORMAT)
            / album_segment(reference_date, album_name)
            / file_name)
