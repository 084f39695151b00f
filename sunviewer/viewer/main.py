#!/usr/bin/env python3
"""
Sun Viewer - Standalone Application

Hourly solar image archive browser.

Usage:
    sunviewer --archive http://localhost:8080
    sunviewer --archive /srv/www --config config/sunviewer.yml

Or manually:
    python -m sunviewer.viewer.main
"""

import sys
import argparse
import signal

from PyQt6.QtWidgets import QApplication

from ..common.config import get_config
from ..common.logging_config import setup_logging_from_config
from .controller import SunViewerController
from .image_client import ArchiveImageClient
from .main_window import SunViewerMainWindow
from .shortcuts import KeyboardShortcuts
from .theme import apply_dark_theme
from .widgets import KeyEventSource


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Sun Viewer - Hourly Solar Image Archive Browser"
    )
    parser.add_argument(
        '--config',
        default=None,
        help='YAML configuration file (default: $SUNVIEWER_CONFIG or config/sunviewer.yml)'
    )
    parser.add_argument(
        '--archive',
        default=None,
        help='Archive root: http(s) URL or local directory containing the image tree'
    )
    parser.add_argument(
        '--log-level',
        default=None,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Logging level (overrides config)'
    )
    parser.add_argument(
        '--json-logs',
        action='store_true',
        help='Emit JSON-formatted log lines'
    )
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    config = get_config(args.config)
    if args.archive:
        config.archive.archive_url = args.archive
    if args.log_level:
        config.logging.level = args.log_level
    if args.json_logs:
        config.logging.json_format = True

    logger = setup_logging_from_config("sunviewer", config.logging)
    logger.info("Starting Sun Viewer...")

    # Create application
    app = QApplication(sys.argv)
    app.setApplicationName("Sun Viewer")
    app.setOrganizationName("SunViewer")

    apply_dark_theme(app)

    controller = SunViewerController.from_config(config)
    logger.info(f"Viewer state: {controller.get_status()}")

    window = SunViewerMainWindow(controller)

    # Keyboard shortcuts
    key_source = KeyEventSource(app)
    app.installEventFilter(key_source)
    shortcuts = KeyboardShortcuts(controller)
    shortcuts.attach(key_source)

    # Image client
    client = ArchiveImageClient(config.archive)
    client.start()
    window.set_client(client)

    window.show()
    logger.info("Sun Viewer started successfully")

    # Handle Ctrl+C gracefully
    def signal_handler(signum, frame):
        logger.info("Received interrupt signal, shutting down...")
        app.quit()

    signal.signal(signal.SIGINT, signal_handler)

    # Run event loop
    exit_code = app.exec()

    # Cleanup
    shortcuts.detach()
    app.removeEventFilter(key_source)
    client.stop()
    logger.info("Sun Viewer closed")

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
