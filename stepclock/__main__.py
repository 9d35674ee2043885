"""Allow running StepClock as a module: python -m stepclock."""

import sys

from PyQt6.QtWidgets import QApplication

from .database.db import init_db
from .logger import log, setup_logging
from .settings import load_settings


def main() -> None:
    settings = load_settings()
    setup_logging(settings.log_level, console=settings.log_to_console)
    init_db()
    log.info("=== StepClock starting ===")

    app = QApplication(sys.argv)
    app.setApplicationName("StepClock")
    app.setOrganizationName("StepClock")

    from .app import StepClockApp

    window = StepClockApp(settings)
    app.aboutToQuit.connect(window.shutdown)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
