"""
Application Initialization
==========================
This module wires the model, the views and the controllers together and
starts the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Configures logging from the command line.
2. Creates the Qt Application (organisation/application names for QSettings).
3. Resolves the persisted theme once, before any widget is built.
4. Instantiates the Main Window and hands control to Qt.
"""
import argparse
import logging
import sys
from typing import Optional, Sequence

from quantumsketches.app.application import create_app
from quantumsketches.controller.settings import load_theme
from quantumsketches.logging_config import setup_logging
from quantumsketches.view.main_window import MainWindow

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="quantumsketches",
        description="Interactive double-slit, superposition and entanglement sketches.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Console/file log level (default: INFO).",
    )
    parser.add_argument("--log-file", default=None, help="Optional path of a log file.")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)

    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=args.log_level, log_file=args.log_file)

    # 2. Create the Qt Application
    app = create_app()

    # 3. Theme is fixed for the lifetime of the window
    theme = load_theme()

    # 4. Initialize the Main Window
    window = MainWindow(theme)
    window.show()

    # 5. Start Event Loop
    logger.info("Entering event loop.")
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
