import argparse
from pathlib import Path
import logging
import sys

if __package__ is None or __package__ == "":
    sys.path.append(str(Path(__file__).resolve().parents[1]))

from rollcall.core.config import get_settings
from rollcall.core.errors import RollcallError
from rollcall.db.session import get_session_factory
from rollcall.services.classroom import open_classroom
from rollcall.services.gate import read_roster


def parse_args() -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Import or update students from an LMS roster export.")
    parser.add_argument("path", type=Path)
    parser.add_argument("--encoding", default=settings.roster_encoding)
    parser.add_argument("--delimiter", default=settings.roster_delimiter)
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(level=get_settings().log_level)
    entries = read_roster(args.path, encoding=args.encoding, delimiter=args.delimiter)
    session_factory = get_session_factory()
    with session_factory() as db:
        classroom = open_classroom(db)
        try:
            result = classroom.import_roster(entries)
        except RollcallError as exc:
            print(f"Roster import failed: {exc.detail}", file=sys.stderr)
            return 1
        print(
            f"Roster imported: {result.created} created, {result.updated} updated, "
            f"{result.dropped} dropped, {result.unchanged} unchanged; {len(classroom.index)} active students."
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
