import re
from typing import Optional

from artinsitu.model.scene import PhysicalDimensions

_DIMENSIONS_RE = re.compile(r"^(\d+(?:\.\d+)?)\s*[×xX]\s*(\d+(?:\.\d+)?)\s*cm$", re.IGNORECASE)
_HEX_RGB_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


def parse_dimensions(text: Optional[str]) -> Optional[PhysicalDimensions]:
    """Parse '96 × 80 cm' (separator ×, x or X). Returns None when unparsable."""
    if not text or not isinstance(text, str):
        return None
    match = _DIMENSIONS_RE.match(text.strip())
    if not match:
        return None
    width_cm = float(match.group(1))
    height_cm = float(match.group(2))
    if width_cm <= 0 or height_cm <= 0:
        return None
    return PhysicalDimensions(width_cm=width_cm, height_cm=height_cm)


def darken_hex(hex_color: str, factor: float) -> str:
    """Multiply each RGB channel by factor. Non #rrggbb input is returned unchanged."""
    match = _HEX_RGB_RE.match(hex_color)
    if not match:
        return hex_color
    r, g, b = (min(255, round(int(c, 16) * factor)) for c in match.groups())
    return f"#{r:02x}{g:02x}{b:02x}"
