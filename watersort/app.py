"""Application entry point and setup for the Water Sort puzzle."""

import logging
import sys

from PySide6.QtWidgets import QApplication

from watersort.core.config import GameConfig
from watersort.core.levels import build_level_set
from watersort.core.progress import GameStore
from watersort.core.session import PuzzleSession
from watersort.ui.main_window import MainWindow


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run() -> None:
    """Initialize the application, restore the session, and start the main window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("Water Sort")
    app.setApplicationDisplayName("Water Sort")

    config = GameConfig.load()
    store = GameStore()
    levels = build_level_set(config, store)
    session = PuzzleSession.restore(config, levels, store)

    window = MainWindow(session=session, config=config)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
