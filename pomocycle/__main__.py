"""Allow running PomoCycle as a module: python -m pomocycle."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .app import PomoCycleApp
from .settings import load_settings


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("pomocycle")


def main() -> None:
    logger = setup_logging()
    settings = load_settings()

    app = QApplication(sys.argv)
    app.setApplicationName("PomoCycle")
    app.setOrganizationName("PomoCycle")

    window = PomoCycleApp(settings)
    window.show()
    logger.info("PomoCycle ready")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
