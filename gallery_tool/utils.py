import os
import logging

logger = logging.getLogger("GalleryToolLogger")

APP_DIR_NAME = "ArtworkSelectionBrowser"


def get_persistent_data_path(filename):
    """Generates a path to a file in a persistent application data folder.

    This function determines the appropriate user-specific data directory
    based on the operating system (%APPDATA% on Windows, home directory
    on others), creates a folder for the application if it doesn't exist,
    and returns the full path for the given filename within that folder.
    This is used for the config file and the local log directory.

    Args:
        filename (str): The name of the file to be stored.

    Returns:
        str: The absolute path to the file in the persistent data folder.
    """
    app_data_path = os.getenv("APPDATA") or os.path.expanduser("~")
    app_dir = os.path.join(app_data_path, APP_DIR_NAME)

    try:
        os.makedirs(app_dir, exist_ok=True)
    except OSError as e:
        # Fallback to current directory if AppData is not writable
        logger.error(f"Could not create AppData directory: {e}. Falling back to local directory.")
        app_dir = "."

    return os.path.join(app_dir, filename)
