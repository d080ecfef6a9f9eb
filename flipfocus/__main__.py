"""Allow running FlipFocus as a module: python -m flipfocus."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .app import FocusController
from .settings import load_settings
from .ui.timer_window import TimerWindow


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("flipfocus")


def main() -> None:
    settings = load_settings()
    logger = setup_logging(settings.log_level)

    app = QApplication(sys.argv)
    app.setApplicationName("FlipFocus")
    app.setOrganizationName("FlipFocus")

    controller = FocusController(settings)
    controller.load_history()
    app.aboutToQuit.connect(controller.shutdown)

    window = TimerWindow(controller)
    window.show()
    logger.info("FlipFocus ready")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
