import argparse
from pathlib import Path
import logging
import sys

if __package__ is None or __package__ == "":
    sys.path.append(str(Path(__file__).resolve().parents[1]))

from rollcall.core.config import get_settings
from rollcall.db.session import get_session_factory
from rollcall.services.gate import build_export, write_export
from rollcall.services.store import init_store


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Refresh point totals and write the LMS grade upload file.")
    parser.add_argument("path", type=Path)
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=get_settings().log_level)
    session_factory = get_session_factory()
    with session_factory() as db:
        init_store(db)
        table = build_export(db)
    args.path.parent.mkdir(parents=True, exist_ok=True)
    with open(args.path, "w", encoding="utf-8", newline="") as fh:
        rows = write_export(table, fh)
    print(f"Exported {rows} students to {args.path}")


if __name__ == "__main__":
    main()
