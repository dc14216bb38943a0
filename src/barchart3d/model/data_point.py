"""
Chart Input Records
===================
The records a caller hands to the chart. They are frozen: the geometry builder
reads them, never mutates them.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


def normalize_color(color: str) -> str:
    """
    Expands short hex colors ("#rgb", "#rgba") to the long form.

    PyVista only parses 6- and 8-digit hex strings. Named colors and long hex
    strings are returned unchanged.
    """
    text = color.strip()
    digits = text[1:]
    if text.startswith("#") and len(digits) in (3, 4) and all(c in "0123456789abcdefABCDEF" for c in digits):
        return "#" + "".join(c * 2 for c in digits)
    return text


def format_value(value: float) -> str:
    """Formats a coordinate without rounding; whole numbers drop the trailing ".0"."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


@dataclass(frozen=True)
class DataPoint:
    """
    A single bar of the chart.

    Attributes:
        x: Category position along the scene X axis.
        y: Bar height (vertical extent of the box).
        z: Depth position along the scene Y axis.
        color: Fill color (hex string, e.g. "#1f77b4").
        label: Display label, used in the generated hover text.
        hover_text: Optional hover text overriding the generated one.
    """
    x: float
    y: float
    z: float
    color: str
    label: str
    hover_text: Optional[str] = None

    def resolved_hover_text(self) -> str:
        """Returns the caller's hover text, or one built from the coordinates."""
        if self.hover_text is not None:
            return self.hover_text
        return (
            f"{self.label}<br>X: {format_value(self.x)}"
            f"<br>Z: {format_value(self.z)}<br>Value: {format_value(self.y)}"
        )


@dataclass(frozen=True)
class LegendItem:
    """A swatch + label row of the legend overlay."""
    color: str
    label: str
