"""
Scene Data Model
================
Constants and value types describing the synthetic room scene.

Why is this file needed?
------------------------
1. World Space: Every piece of scene geometry is authored in one fixed
   1600 x 900 logical coordinate system. Only the final transform maps it
   to device pixels.
2. Anchors: The artwork and the chair are described by small anchor
   records that attach them to the wall/floor seam.
3. Inputs: Physical dimensions and colour presets arrive from the host
   (product page, dialog) and are validated once, here.

Classes:
    PhysicalDimensions: Real-world artwork size in centimetres.
    ColorPair: Top/bottom colours of a vertical gradient.
    ArtworkAnchor: Artwork box, attached above the seam.
    ChairAnchor: Chair box, standing on the floor below the seam.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional

# -------------------------------------------------------------------------------
# World
# -------------------------------------------------------------------------------

WORLD_WIDTH: float = 1600.0
WORLD_HEIGHT: float = 900.0
SEAM_Y: float = 720.0
SEAM_Y_LARGE_ART: float = 800.0

# Viewport breakpoints (CSS px)
W_MOBILE: float = 380.0
W_TABLET: float = 768.0
W_DESKTOP: float = 1400.0

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


def is_valid_color(value: str) -> bool:
    """Accepts #rgb, #rrggbb and #aarrggbb strings."""
    return isinstance(value, str) and bool(_HEX_COLOR.match(value))


# -------------------------------------------------------------------------------
# Inputs
# -------------------------------------------------------------------------------

@dataclass(frozen=True)
class PhysicalDimensions:
    """Real artwork size in centimetres."""
    width_cm: float
    height_cm: float

    def __post_init__(self) -> None:
        for name in ("width_cm", "height_cm"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or not math.isfinite(value) or value <= 0:
                raise ValueError(f"{name} must be a finite number > 0, got {value!r}.")

    @property
    def long_edge(self) -> float:
        return max(self.width_cm, self.height_cm)

    @property
    def short_edge(self) -> float:
        return min(self.width_cm, self.height_cm)

    def any_edge_at_least(self, cm: float) -> bool:
        return self.width_cm >= cm or self.height_cm >= cm

    def both_edges_below(self, cm: float) -> bool:
        return self.width_cm < cm and self.height_cm < cm


@dataclass(frozen=True)
class ColorPair:
    """Colours at the top and the bottom of a vertical gradient."""
    top: str
    bottom: str

    def __post_init__(self) -> None:
        for name in ("top", "bottom"):
            value = getattr(self, name)
            if not is_valid_color(value):
                raise ValueError(f"Invalid {name} colour: {value!r}.")


WALL_COLORS = ColorPair(top="#f8f7f6", bottom="#f2f0ed")
FLOOR_COLORS = ColorPair(top="#b8b5b0", bottom="#9a9792")
BASEBOARD_COLOR: str = "#a5a29d"
BASEBOARD_DARKEN_FACTOR: float = 0.90


# -------------------------------------------------------------------------------
# Anchors
# -------------------------------------------------------------------------------

def _apply_overrides(anchor: Any, overrides: Optional[Mapping[str, float]]) -> Any:
    """Return a copy of a frozen anchor with the given fields replaced."""
    if not overrides:
        return anchor
    allowed = {f.name for f in fields(anchor)}
    unknown = set(overrides) - allowed
    if unknown:
        raise ValueError(
            f"Unknown {type(anchor).__name__} field(s): {', '.join(sorted(unknown))}."
        )
    return replace(anchor, **{k: float(v) for k, v in overrides.items()})


@dataclass(frozen=True)
class ArtworkAnchor:
    """
    Artwork bounding box in world space.

    The bottom edge sits `bottom_gap` units above the seam.
    """
    center_x: float
    width: float
    height: float
    bottom_gap: float

    def with_overrides(self, overrides: Optional[Mapping[str, float]]) -> ArtworkAnchor:
        return _apply_overrides(self, overrides)

    def box(self, seam_y: float) -> tuple[float, float, float, float]:
        """(x, y, w, h) of the artwork box for the given seam."""
        x = self.center_x - self.width / 2
        y = seam_y - self.bottom_gap - self.height
        return x, y, self.width, self.height

    @property
    def right_edge(self) -> float:
        return self.center_x + self.width / 2


@dataclass(frozen=True)
class ChairAnchor:
    """
    Chair bounding box in world space.

    The bottom edge (the feet) sits `floor_offset` units below the seam.
    """
    center_x: float
    width: float
    height: float
    floor_offset: float

    def with_overrides(self, overrides: Optional[Mapping[str, float]]) -> ChairAnchor:
        return _apply_overrides(self, overrides)

    def box(self, seam_y: float) -> tuple[float, float, float, float]:
        """(x, y, w, h) of the chair box for the given seam."""
        bottom = seam_y + self.floor_offset
        return self.center_x - self.width / 2, bottom - self.height, self.width, self.height

    def feet_y(self, seam_y: float) -> float:
        return seam_y + self.floor_offset


CHAIR_GAP_RIGHT_OF_ART: float = 200.0

DEFAULT_ART = ArtworkAnchor(
    center_x=WORLD_WIDTH * 0.5,
    width=414.0,
    height=345.0,
    bottom_gap=280.0,
)

DEFAULT_CHAIR = ChairAnchor(
    center_x=WORLD_WIDTH * 0.5 + 414.0 / 2 + CHAIR_GAP_RIGHT_OF_ART,
    width=460.0,
    height=430.0,
    floor_offset=100.0,
)
