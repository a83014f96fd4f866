"""Perceptual color distance.

Colors are converted sRGB -> XYZ (D65) -> CIE L*a*b* and compared with the
CIE76 difference metric (Euclidean distance in Lab). A distance below ~2 is
barely perceptible; above ~10 colors read as different.
"""

from __future__ import annotations

import math
import re

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

# D65 reference white
_REF_X = 95.047
_REF_Y = 100.0
_REF_Z = 108.883

RGB = tuple[float, float, float]
Lab = tuple[float, float, float]


def normalize_hex(value: str) -> str:
    """Normalize a hex color to ``#RRGGBB`` upper case.

    Args:
        value: ``#RGB``, ``#RRGGBB`` (leading ``#`` optional)

    Returns:
        Canonical hex string

    Raises:
        ValueError: If ``value`` is not a hex color
    """
    match = _HEX_RE.match(value.strip())
    if not match:
        raise ValueError(f"Invalid hex color: {value!r}")

    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    return f"#{digits.upper()}"


def is_hex_color(value: str) -> bool:
    """True if ``value`` parses as a hex color."""
    return bool(_HEX_RE.match(value.strip()))


def hex_to_rgb(value: str) -> RGB:
    """Parse a hex color into 0-255 RGB channels."""
    digits = normalize_hex(value)[1:]
    return (
        float(int(digits[0:2], 16)),
        float(int(digits[2:4], 16)),
        float(int(digits[4:6], 16)),
    )


def _linearize(channel: float) -> float:
    c = channel / 255.0
    if c > 0.04045:
        return ((c + 0.055) / 1.055) ** 2.4
    return c / 12.92


def rgb_to_xyz(rgb: RGB) -> tuple[float, float, float]:
    """Convert 0-255 sRGB to XYZ scaled to 0-100."""
    r, g, b = (_linearize(c) for c in rgb)
    x = r * 0.4124 + g * 0.3576 + b * 0.1805
    y = r * 0.2126 + g * 0.7152 + b * 0.0722
    z = r * 0.0193 + g * 0.1192 + b * 0.9505
    return x * 100, y * 100, z * 100


def _pivot(value: float) -> float:
    if value > 0.008856:
        return value ** (1 / 3)
    return 7.787 * value + 16 / 116


def xyz_to_lab(xyz: tuple[float, float, float]) -> Lab:
    """Convert XYZ to CIE L*a*b* under the D65 white point."""
    fx = _pivot(xyz[0] / _REF_X)
    fy = _pivot(xyz[1] / _REF_Y)
    fz = _pivot(xyz[2] / _REF_Z)
    return 116 * fy - 16, 500 * (fx - fy), 200 * (fy - fz)


def hex_to_lab(value: str) -> Lab:
    return xyz_to_lab(rgb_to_xyz(hex_to_rgb(value)))


def delta_e(a: str, b: str) -> float:
    """CIE76 perceptual distance between two hex colors."""
    la, aa, ba = hex_to_lab(a)
    lb, ab, bb = hex_to_lab(b)
    return math.sqrt((la - lb) ** 2 + (aa - ab) ** 2 + (ba - bb) ** 2)
