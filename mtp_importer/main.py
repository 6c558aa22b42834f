import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional

from . import config
from .core import MediaImporterApp
from .device.local import MountedDeviceCapability
from .exceptions import MtpImporterError
from .reporting import format_file_line


def setup_logging(verbose: bool, log_dir: Optional[Path] = None):
    """Sets up logging to the console, and to a file in the target root when there is one."""
    log_level = logging.DEBUG if verbose else logging.INFO

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_dir / config.LOG_FILE_NAME, encoding='utf-8'))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers,
        force=True,
    )


def parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="MTP Importer: copy photos and videos off a portable device")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    p.add_argument("--mount-root", type=Path, action="append", default=None,
                   help="Directory where devices are mounted (repeatable, default: gvfs and /media)")

    sub = p.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="Lists all devices")

    content = sub.add_parser("list-content", help="Shows the media files on a device")
    content.add_argument("-d", "--device", default=None, help="Device name, defaults to first device")
    content.add_argument("-p", "--path", default=None, help="Path to list, defaults to device root")

    copy = sub.add_parser(
        "copy",
        help="Copy files into <TARGET>/{file_type}/{year}/<DATE> <ALBUM_NAME>/{file_name}",
    )
    copy.add_argument("-t", "--target-path", type=Path, required=True,
                      help="Prefix for path that will be copied to, e.g. /home/user/Pictures")
    copy.add_argument("-d", "--device", default=None, help="Device name, defaults to first device")
    copy.add_argument("-s", "--source-path", default=None,
                      help="Path copied from recursively, e.g. /DCIM/Camera. Defaults to device root")
    copy.add_argument("--date", type=parse_date, default=None,
                      help="Date to use for the album directory (YYYY-MM-DD), defaults to today")
    copy.add_argument("--keep-going", action="store_true", help="Continue past files that fail to copy")
    copy.add_argument("--no-progress", action="store_true", help="Hide the progress bar")
    copy.add_argument("album_name", nargs="?", default=None,
                      help="Album name appended to the date directory")

    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    log_dir = args.target_path.resolve() if args.command == "copy" else None
    setup_logging(args.verbose, log_dir)

    app = MediaImporterApp(MountedDeviceCapability(args.mount_root))

    try:
        if args.command == "list":
            devices = app.list_devices()
            print(f"Found {len(devices)} MTP devices:")
            for name in devices:
                print(name)

        elif args.command == "list-content":
            for file in app.list_files(args.device, args.path):
                print(format_file_line(file))

        elif args.command == "copy":
            app.copy_batch(
                target_root=log_dir,
                device_name=args.device,
                source_path=args.source_path,
                reference_date=args.date,
                album_name=args.album_name,
                keep_going=args.keep_going,
                show_progress=not args.no_progress,
            )
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        sys.exit(1)
    except MtpImporterError as e:
        logging.error(str(e))
        sys.exit(1)
    except Exception:
        logging.exception("Fatal error.")
        sys.exit(1)


if __name__ == "__main__":
    main()
