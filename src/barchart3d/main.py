"""
Application Initialization
==========================
Starts the demo viewer: logging, the QApplication, the main window and the
Qt event loop.

Usage:
    $ python -m barchart3d [data.json|data.csv] [--legend] [--debug] [--log-level LEVEL] [--log-file FILE]
"""
import argparse
import logging
import sys
from typing import Optional, Sequence

from PySide6.QtCore import QTimer

from barchart3d.application import create_app
from barchart3d.config import SAMPLE_DATA_PATH
from barchart3d.logging_config import setup_logging
from barchart3d.view.main_window import MainWindow

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="barchart3d", description="Interactive 3D bar chart viewer.")
    parser.add_argument(
        "data",
        nargs="?",
        default=SAMPLE_DATA_PATH,
        help="Chart data file (.json or .csv). Defaults to the bundled sample."
    )
    parser.add_argument("--legend", action="store_true", help="Show the legend overlay.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging (same as --log-level DEBUG).")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging level of the console and the log file."
    )
    parser.add_argument("--log-file", default=None, help="Also write the log to this file.")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)

    # 1. Setup Logging (Console + Optional File)
    setup_logging(level="DEBUG" if args.debug else args.log_level, log_file=args.log_file)

    # 2. Create the Qt Application
    app = create_app()

    # 3. Initialize the Main Window
    extra_options = {"show_legend": True} if args.legend else {}
    window = MainWindow(extra_options=extra_options)
    window.show()

    # 4. Load data once the window is laid out, so the viewport width is real
    QTimer.singleShot(0, lambda: window.load_file(args.data))

    # 5. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
