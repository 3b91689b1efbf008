# main.py

import argparse
import logging
import sys
from typing import List, Optional

from api_client import HttpFilmSource
from config import SOURCES, Settings, load_settings
from controller import CatalogController
from data import load_films_document
from errors import CatalogError
from logger import init_logger
from storage import LocalFilmSource

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Film catalog desktop client")
    parser.add_argument("--source", choices=SOURCES, help="where films come from")
    parser.add_argument("--api-url", dest="api_url", help="base url of the films API")
    parser.add_argument("--timeout", type=float, help="request timeout in seconds")
    parser.add_argument("--db", dest="db_path", help="sqlite file for the local source")
    parser.add_argument("--seed", dest="seed_file", help="JSON document to seed the local source")
    parser.add_argument("--lang", choices=("en", "bg"))
    parser.add_argument("--theme", choices=("light", "dark", "night"))
    parser.add_argument(
        "--no-print", dest="print_tickets", action="store_false", default=None,
        help="do not write PDF ticket stubs",
    )
    return parser.parse_args(argv)


def make_source(settings: Settings):
    if settings.source == "local":
        seed = load_films_document(settings.seed_file) if settings.seed_file else None
        return LocalFilmSource(settings.db_path, seed=seed)
    return HttpFilmSource(settings.api_url, timeout=settings.timeout)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        settings = load_settings(**vars(args))
    except CatalogError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    init_logger(settings.log_file, settings.log_level)
    logger.info("Starting with %s source", settings.source)

    try:
        source = make_source(settings)
    except CatalogError as e:
        logger.error("Could not open the film source: %s", e)
        print(f"Could not open the film source: {e}", file=sys.stderr)
        return 1

    # Qt is imported late so the helpers above stay usable without a display
    from PyQt5.QtWidgets import QApplication
    from ui_main_window import MainWindow

    app = QApplication(sys.argv if argv is None else [sys.argv[0], *argv])
    window = MainWindow(CatalogController(source), settings)
    window.show()
    window.start()
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
