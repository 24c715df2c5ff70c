"""
Scene Properties
Everything the host (dialog, product page, CLI) hands to the canvas.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from artinsitu.config import DEFAULT_ARTWORK_SRC, DEFAULT_CHAIR_SRC
from artinsitu.model.scene import (
    ColorPair,
    DEFAULT_ART,
    DEFAULT_CHAIR,
    PhysicalDimensions,
)


@dataclass(frozen=True)
class SceneProps:
    """
    Inbound scene configuration. All fields are optional.

    Anchor overrides are partial: only the named ArtworkAnchor / ChairAnchor
    fields replace the defaults.
    """
    artwork_src: str = DEFAULT_ARTWORK_SRC
    chair_src: str = DEFAULT_CHAIR_SRC
    dimensions: Optional[PhysicalDimensions] = None
    wall_colors: Optional[ColorPair] = None
    floor_colors: Optional[ColorPair] = None
    show_chair: bool = True
    show_debug: bool = False
    artwork_anchor: Optional[Mapping[str, float]] = None
    chair_anchor: Optional[Mapping[str, float]] = None

    def __post_init__(self) -> None:
        # raises ValueError on unknown field names
        DEFAULT_ART.with_overrides(self.artwork_anchor)
        DEFAULT_CHAIR.with_overrides(self.chair_anchor)
