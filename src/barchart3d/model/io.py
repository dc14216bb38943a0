"""
Input/Output (JSON, CSV)
Loads chart data points, and optionally chart options, from files.

JSON files hold either a plain list of point objects or an object with a
"data" list and an optional "options" mapping. CSV files have a header row
with the columns x, y, z, color, label and an optional hover_text.
"""
import csv
import json
import logging
import os
from typing import Any, Optional

from barchart3d.model.data_point import DataPoint
from barchart3d.model.options import resolve_options

logger = logging.getLogger(__name__)

REQUIRED_FIELDS: tuple[str, ...] = ("x", "y", "z", "color", "label")
SUPPORTED_EXTENSIONS: tuple[str, ...] = (".json", ".csv")


def load_chart_file(filepath: str) -> tuple[list[DataPoint], dict[str, Any]]:
    """
    Loads data points and chart options from a file.

    Args:
        filepath: Path to a .json or .csv file.

    Returns:
        (points, options). CSV files carry no options, so the mapping is empty.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the extension is unsupported, a record is malformed or
            the options do not resolve.
    """
    logger.info(f"Loading chart data from: {filepath}")
    if not os.path.exists(filepath):
        msg = f"Chart data file '{filepath}' does not exist."
        logger.error(msg)
        raise FileNotFoundError(msg)

    ext = os.path.splitext(filepath)[1].lower()
    if ext == ".json":
        points, options = _load_json(filepath)
    elif ext == ".csv":
        points, options = _load_csv(filepath), {}
    else:
        msg = f"Unsupported chart data format '{ext}' (expected one of {', '.join(SUPPORTED_EXTENSIONS)})."
        logger.error(msg)
        raise ValueError(msg)

    logger.info(f"Loaded {len(points)} data points from {os.path.basename(filepath)}.")
    return points, options


def load_data_points(filepath: str) -> list[DataPoint]:
    """Loads only the data points of a chart file."""
    points, _ = load_chart_file(filepath)
    return points


def point_from_record(record: dict[str, Any], source: str = "<record>", row: int = 0) -> DataPoint:
    """
    Builds a DataPoint from a parsed record (JSON object or CSV row).

    Raises:
        ValueError: If a required field is missing or a coordinate is not numeric.
    """
    if not isinstance(record, dict):
        msg = f"{source}, row {row}: expected an object, got {type(record).__name__}."
        logger.error(msg)
        raise ValueError(msg)

    missing = [name for name in REQUIRED_FIELDS if record.get(name) in (None, "")]
    if missing:
        msg = f"{source}, row {row}: missing field(s) {', '.join(missing)}."
        logger.error(msg)
        raise ValueError(msg)

    try:
        x = float(record["x"])
        y = float(record["y"])
        z = float(record["z"])
    except (TypeError, ValueError) as e:
        msg = f"{source}, row {row}: coordinates must be numeric ({e})."
        logger.error(msg)
        raise ValueError(msg) from e

    hover_value = record.get("hover_text", record.get("hoverText"))
    hover_text: Optional[str] = None if hover_value in (None, "") else str(hover_value)

    return DataPoint(
        x=x,
        y=y,
        z=z,
        color=str(record["color"]),
        label=str(record["label"]),
        hover_text=hover_text,
    )


def _load_json(filepath: str) -> tuple[list[DataPoint], dict[str, Any]]:
    source = os.path.basename(filepath)
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except json.JSONDecodeError as e:
        msg = f"{source}: invalid JSON ({e})."
        logger.error(msg)
        raise ValueError(msg) from e

    if isinstance(payload, list):
        records, options = payload, {}
    elif isinstance(payload, dict):
        records = payload.get("data", [])
        options = payload.get("options") or {}
    else:
        msg = f"{source}: expected a list of points or an object with a 'data' list."
        logger.error(msg)
        raise ValueError(msg)

    if not isinstance(records, list) or not isinstance(options, dict):
        msg = f"{source}: 'data' must be a list and 'options' an object."
        logger.error(msg)
        raise ValueError(msg)

    points = [point_from_record(rec, source, row) for row, rec in enumerate(records, start=1)]
    try:
        resolve_options(options)
    except ValueError as e:
        # resolve_options already logged the details
        raise ValueError(f"{source}: invalid options ({e})") from e
    return points, options


def _load_csv(filepath: str) -> list[DataPoint]:
    source = os.path.basename(filepath)
    with open(filepath, "r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        # Header is row 1
        return [point_from_record(rec, source, row) for row, rec in enumerate(reader, start=2)]
