import os

# Qt widgets in the tests render without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from barchart3d.application import create_app
from barchart3d.logging_config import setup_logging
from barchart3d.model.data_point import DataPoint


@pytest.fixture(scope="session", autouse=True)
def setup_app_logging():
    """
    Configure the package logging once for the whole test session.
    """
    setup_logging()


@pytest.fixture(scope="session")
def qapp():
    return create_app()


@pytest.fixture
def five_points() -> list[DataPoint]:
    colors = ["#1f77b4", "#ff7f0e", "#2ca02c", "#d62728", "#9467bd"]
    return [
        DataPoint(x=i + 1, y=10.0 * (i + 1), z=20.0, color=color, label=f"Bar {i}")
        for i, color in enumerate(colors)
    ]
