"""
Dimension Mapper
================
Converts a physical artwork size (cm) into world-space size and derives
the per-size placement parameters: art zoom factor, bottom gap and seam.

All functions are pure. Absent dimensions map to identity behaviour
(factor 1, default gap and seam).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from artinsitu.model.scene import (
    PhysicalDimensions,
    SEAM_Y,
    SEAM_Y_LARGE_ART,
    W_DESKTOP,
)

# A 96 x 80 cm reference artwork is drawn as a 414 x 345 box.
REF_ART_CM: tuple[float, float] = (96.0, 80.0)
REF_ART_WORLD: tuple[float, float] = (414.0, 345.0)
REF_LONG_EDGE_CM: float = max(REF_ART_CM)

ART_ZOOM_FACTOR_MIN: float = 0.32
ART_ZOOM_FACTOR_MAX: float = 1.12
ART_ZOOM_FACTOR_MAX_LARGE: float = 1.4

BOTTOM_GAP_REF: float = 280.0
BOTTOM_GAP_MIN: float = 100.0
BOTTOM_GAP_SMALL_ART: float = 190.0
BOTTOM_GAP_HEIGHT_FACTOR: float = 0.6

LARGE_ART_CM: float = 200.0
HUGE_ART_CM: float = 300.0
SMALL_ART_CM: float = 100.0


@dataclass(frozen=True)
class DimensionMapping:
    """Result of mapping a physical size into the scene."""
    world_width: float
    world_height: float
    art_zoom_factor: float
    bottom_gap: float
    seam_y: float


def dimensions_to_world_size(dims: PhysicalDimensions) -> tuple[float, float]:
    """
    Scale a physical size to world units.

    Width and height use independent factors; the box does not keep the
    reference aspect ratio.
    """
    return (
        dims.width_cm / REF_ART_CM[0] * REF_ART_WORLD[0],
        dims.height_cm / REF_ART_CM[1] * REF_ART_WORLD[1],
    )


def seam_for_dimensions(dims: Optional[PhysicalDimensions]) -> float:
    """Large artworks (an edge in [200, 300) cm) lower the seam to show more floor."""
    if dims is None:
        return SEAM_Y
    if dims.any_edge_at_least(HUGE_ART_CM):
        return SEAM_Y
    if dims.any_edge_at_least(LARGE_ART_CM):
        return SEAM_Y_LARGE_ART
    return SEAM_Y


def bottom_gap_for_art_height(
    art_world_height: float,
    dims: Optional[PhysicalDimensions],
    viewport_width: float,
) -> float:
    """
    Gap between the artwork's bottom edge and the seam.

    Taller artworks sit closer to the seam, never closer than BOTTOM_GAP_MIN.
    """
    if viewport_width >= W_DESKTOP and dims is not None and dims.both_edges_below(SMALL_ART_CM):
        return BOTTOM_GAP_SMALL_ART
    reduction = (art_world_height - REF_ART_WORLD[1]) * BOTTOM_GAP_HEIGHT_FACTOR
    return max(BOTTOM_GAP_MIN, BOTTOM_GAP_REF - reduction)


def art_zoom_factor(dims: Optional[PhysicalDimensions]) -> float:
    """
    Base zoom factor for a physical size: smaller artworks zoom in more.

    Desktop-only overrides are layout policy and live in the layout engine.
    """
    if dims is None:
        return 1.0
    factor = REF_LONG_EDGE_CM / dims.long_edge
    max_factor = ART_ZOOM_FACTOR_MAX
    if dims.any_edge_at_least(LARGE_ART_CM):
        wide_boost = 1.1 if dims.any_edge_at_least(HUGE_ART_CM) else 1.3
        factor *= wide_boost
        max_factor = ART_ZOOM_FACTOR_MAX_LARGE
    return max(ART_ZOOM_FACTOR_MIN, min(max_factor, factor))


def map_dimensions(dims: Optional[PhysicalDimensions], viewport_width: float) -> DimensionMapping:
    """Map an optional physical size to world size, zoom factor, bottom gap and seam."""
    if dims is None:
        world_w, world_h = REF_ART_WORLD
    else:
        world_w, world_h = dimensions_to_world_size(dims)
    return DimensionMapping(
        world_width=world_w,
        world_height=world_h,
        art_zoom_factor=art_zoom_factor(dims),
        bottom_gap=bottom_gap_for_art_height(world_h, dims, viewport_width),
        seam_y=seam_for_dimensions(dims),
    )
