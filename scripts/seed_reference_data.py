from pathlib import Path
import logging
import sys

if __package__ is None or __package__ == "":
    sys.path.append(str(Path(__file__).resolve().parents[1]))

from rollcall.core.config import get_settings
from rollcall.db.session import get_session_factory
from rollcall.services.store import init_store, list_categories


def main() -> None:
    logging.basicConfig(level=get_settings().log_level)
    session_factory = get_session_factory()
    with session_factory() as db:
        metadata = init_store(db)
        categories = [category.name for category in list_categories(db)]
        print(f"Store created {metadata.first_created:%Y-%m-%d %H:%M}, categories: {', '.join(categories)}")


if __name__ == "__main__":
    main()
