"""Turn stored color and font descriptors into Qt objects for painting."""
from __future__ import annotations

from typing import Dict, Optional

from PyQt6.QtGui import QColor, QFont

from .model import Color, ColorScheme, parse_font


def _alpha(opacity: float) -> int:
    return int(round(255 * max(0.0, min(float(opacity), 1.0))))


def to_qcolor(value: str, fallback: str, opacity: Optional[float] = None) -> QColor:
    color = Color.from_hex_or(value, fallback)
    if color is None:
        return QColor()
    red, green, blue = color.to_rgb()
    if opacity is None:
        return QColor(red, green, blue)
    return QColor(red, green, blue, _alpha(opacity))


def scheme_qcolors(scheme: ColorScheme) -> Dict[str, QColor]:
    """Scheme colors keyed by field name; the background carries the scheme opacity."""

    colors = {
        "background": QColor(*scheme.background_color().to_rgb(), _alpha(scheme.opacity)),
        "foreground1": QColor(*scheme.foreground1_color().to_rgb()),
        "foreground2": QColor(*scheme.foreground2_color().to_rgb()),
        "tag_foreground": QColor(*scheme.tag_foreground_color().to_rgb()),
    }
    for index in range(len(scheme.palette)):
        color = scheme.palette_color(index)
        if color is not None:
            colors[f"palette{index}"] = QColor(*color.to_rgb())
    return colors


def to_qfont(descriptor: str) -> QFont:
    spec = parse_font(descriptor)
    font = QFont(spec.face)
    font.setPointSize(spec.size)
    font.setWeight(QFont.Weight.Bold if spec.bold else QFont.Weight.Normal)
    font.setItalic(spec.italic)
    return font
