"""
Configuration & Path Management
===============================
Central registry for file paths and global constants of the bar chart.

Bar footprint, the compact-viewport breakpoint and the render timing live here
so the model and the view agree on them without importing each other.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    SAMPLE_DATA_PATH (str): Absolute path to the bundled sample chart.
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

    # config.py is in src/barchart3d/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


# Paths
ASSETS_PATH: str = get_resource_path("assets")
SAMPLE_DATA_PATH: str = os.path.join(ASSETS_PATH, "sample_bars.json")

# Bar footprint (scene units), shared by every bar
BAR_WIDTH: float = 0.05
BAR_DEPTH: float = 1.0

# Viewports at or below this width are treated as compact (no legend overlay)
COMPACT_VIEWPORT_WIDTH: int = 768

# Delay of the layout pass that follows a successful draw
RESIZE_DELAY_MS: int = 100

# Camera eye, in units of the normalized scene box
DEFAULT_CAMERA_EYE: tuple[float, float, float] = (1.25, 1.25, 1.25)

# Wireframe style
EDGE_COLOR: str = "black"
EDGE_WIDTH: float = 2.0

if not os.path.exists(ASSETS_PATH):
    logger.warning(f"Assets path not found at {ASSETS_PATH}")
