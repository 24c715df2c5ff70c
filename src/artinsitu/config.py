"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and scene defaults.

Why is this file needed?
------------------------
1. Abstraction: It prevents hardcoded asset paths scattered through the
   view code.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find the bundled sample images when the app is frozen into an .exe.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    DEFAULT_ARTWORK_SRC (str): Bundled sample artwork image.
    DEFAULT_CHAIR_SRC (str): Bundled sample chair image.
"""
import logging
import os
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: resolve relative to this file
    # config.py is in src/artinsitu/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


# Global Constants
ASSETS_PATH: str = get_resource_path("assets")
DEFAULT_ARTWORK_SRC: str = os.path.join(ASSETS_PATH, "images", "testArtwork.webp")
DEFAULT_CHAIR_SRC: str = os.path.join(ASSETS_PATH, "images", "chair.png")

# QSettings keys
SETTINGS_WINDOW_GEOMETRY: str = "window/geometry"

if not os.path.exists(ASSETS_PATH):
    logger.warning(f"Assets path not found at {ASSETS_PATH}")
