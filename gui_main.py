"""Main entry point for the Artwork Selection Browser.

This script configures logging, initializes the QApplication, creates the
main window, and starts the application's event loop. It also handles
setting the platform to 'offscreen' for testing or continuous integration
environments.
"""

import sys
import os
from PySide6.QtWidgets import QApplication

# Ensure the project root is on the path if running this as a script
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from gallery_tool.logger_config import setup_logging
from gallery_tool.utils import get_persistent_data_path
from gui.main_window import MainWindow


def main():
    """Initializes and runs the Qt application.

    In a testing or CI environment, the platform is set to 'offscreen' and
    the event loop is not entered.
    """
    if "pytest" in sys.modules or os.environ.get("CI"):
        os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
        print("Running in offscreen mode.")

    setup_logging(log_dir=get_persistent_data_path("logs"))

    app = QApplication(sys.argv)
    window = MainWindow()

    if QApplication.platformName() != "offscreen":
        window.show()
        sys.exit(app.exec())
    else:
        print("Offscreen application initialized successfully.")


if __name__ == "__main__":
    main()
