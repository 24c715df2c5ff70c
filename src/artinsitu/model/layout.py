"""
Responsive Layout Engine
========================
Turns a viewport size and an optional physical artwork size into the final
world-to-screen projection.

Why is this file needed?
------------------------
1. Breakpoints: The zoom multiplier and the chair nudge are interpolated
   between viewport breakpoints (smoothstep), so resizing never snaps.
2. Zoom policy: The Dimension Mapper's art zoom factor is combined with the
   fit-to-viewport zoom and clamped so the floor stays visible and, on
   mobile, the artwork stays inside the screen.
3. Purity: Everything is recomputed from scratch per frame. There is no
   hidden state, so identical inputs give identical outputs.

Functions:
    responsive_factors: (zoom multiplier, chair nudge) for a viewport width.
    compute_scene_layout: Full per-frame derivation (anchors, seam, zoom, offsets).
    compute_layout: The projection-only view of compute_scene_layout.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Mapping, Optional

from artinsitu.model.dimensions import (
    ART_ZOOM_FACTOR_MIN,
    LARGE_ART_CM,
    map_dimensions,
)
from artinsitu.model.scene import (
    ArtworkAnchor,
    ChairAnchor,
    CHAIR_GAP_RIGHT_OF_ART,
    DEFAULT_ART,
    DEFAULT_CHAIR,
    PhysicalDimensions,
    W_DESKTOP,
    W_MOBILE,
    W_TABLET,
    WORLD_HEIGHT,
    WORLD_WIDTH,
)

logger = logging.getLogger(__name__)

# (zoom multiplier, chair nudge) at each breakpoint
_MOBILE_FACTORS: tuple[float, float] = (2.95, 350.0)
_TABLET_FACTORS: tuple[float, float] = (1.65, 230.0)
_DESKTOP_FACTORS: tuple[float, float] = (1.0, 0.0)

SMALL_ART_DESKTOP_BOOST: float = 1.25
SHARED_SCALE_LONG_EDGE_CM: float = 263.0
SHARED_SCALE_SHORT_EDGE_CM: float = 200.0
MOBILE_ART_WIDTH_RATIO: float = 0.9
LARGE_ART_FOCUS_RATIO: float = 0.25
MIN_BACKGROUND_PAD: float = 800.0


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def smoothstep(t: float) -> float:
    """Cubic Hermite 3t^2 - 2t^3 on t clamped to [0, 1]."""
    x = max(0.0, min(1.0, t))
    return x * x * (3.0 - 2.0 * x)


def zoom_fit(viewport_width: float, viewport_height: float) -> float:
    """Uniform scale at which the world exactly fills the viewport on one axis."""
    return min(viewport_width / WORLD_WIDTH, viewport_height / WORLD_HEIGHT)


def responsive_factors(viewport_width: float) -> tuple[float, float]:
    """
    Zoom multiplier and chair nudge for a viewport width.

    Args:
        viewport_width: Viewport width in CSS pixels.

    Returns:
        (zoom_multiplier, chair_nudge). Constant below W_MOBILE and above
        W_DESKTOP, smoothstep-interpolated in between.
    """
    if viewport_width <= W_MOBILE:
        return _MOBILE_FACTORS
    if viewport_width < W_TABLET:
        start, end, t = _MOBILE_FACTORS, _TABLET_FACTORS, (viewport_width - W_MOBILE) / (W_TABLET - W_MOBILE)
    elif viewport_width < W_DESKTOP:
        start, end, t = _TABLET_FACTORS, _DESKTOP_FACTORS, (viewport_width - W_TABLET) / (W_DESKTOP - W_TABLET)
    else:
        return _DESKTOP_FACTORS
    s = smoothstep(t)
    return lerp(start[0], end[0], s), lerp(start[1], end[1], s)


@dataclass(frozen=True)
class Layout:
    """World-to-screen projection for one frame."""
    zoom: float
    world_offset_x: float
    world_offset_y: float
    chair_nudge: float


@dataclass(frozen=True)
class SceneLayout:
    """Everything derived for one frame, in world units unless noted."""
    viewport_width: float
    viewport_height: float
    seam_y: float
    art: ArtworkAnchor
    chair: ChairAnchor
    art_zoom_factor: float
    zoom_multiplier: float
    chair_nudge: float
    zoom: float
    world_offset_x: float
    world_offset_y: float
    background_pad: float

    @property
    def layout(self) -> Layout:
        return Layout(
            zoom=self.zoom,
            world_offset_x=self.world_offset_x,
            world_offset_y=self.world_offset_y,
            chair_nudge=self.chair_nudge,
        )

    def world_to_device(self, device_pixel_ratio: float) -> tuple[float, float, float]:
        """(scale, dx, dy) mapping world units to device pixels."""
        return (
            device_pixel_ratio * self.zoom,
            device_pixel_ratio * self.world_offset_x,
            device_pixel_ratio * self.world_offset_y,
        )


def _desktop_art_zoom_overrides(
    factor: float,
    dims: Optional[PhysicalDimensions],
    viewport_width: float,
) -> float:
    if viewport_width < W_DESKTOP or dims is None:
        return factor
    if dims.both_edges_below(LARGE_ART_CM):
        factor *= SMALL_ART_DESKTOP_BOOST
    # 263 x 325, 300 x 400 and up share one visual scale
    if dims.long_edge >= SHARED_SCALE_LONG_EDGE_CM and dims.short_edge >= SHARED_SCALE_SHORT_EDGE_CM:
        factor = min(factor, ART_ZOOM_FACTOR_MIN)
    return factor


def compute_scene_layout(
    viewport_width: float,
    viewport_height: float,
    dims: Optional[PhysicalDimensions] = None,
    art_overrides: Optional[Mapping[str, float]] = None,
    chair_overrides: Optional[Mapping[str, float]] = None,
) -> SceneLayout:
    """
    Derive anchors, seam and projection for one frame.

    Args:
        viewport_width: Viewport width in CSS pixels (> 0).
        viewport_height: Viewport height in CSS pixels (> 0).
        dims: Physical artwork size, or None for the built-in box.
        art_overrides: Partial ArtworkAnchor fields applied over the default.
        chair_overrides: Partial ChairAnchor fields applied over the default.

    Returns:
        The complete SceneLayout.

    Raises:
        ValueError: If the viewport is empty or an override names an unknown field.
    """
    if viewport_width <= 0 or viewport_height <= 0:
        raise ValueError(f"Viewport must be non-empty, got {viewport_width} x {viewport_height}.")

    mapping = map_dimensions(dims, viewport_width)
    seam_y = mapping.seam_y
    zoom_multiplier, chair_nudge = responsive_factors(viewport_width)

    art = DEFAULT_ART.with_overrides(art_overrides)
    if dims is not None:
        art = ArtworkAnchor(
            center_x=art.center_x,
            width=mapping.world_width,
            height=mapping.world_height,
            bottom_gap=mapping.bottom_gap,
        )

    chair = DEFAULT_CHAIR.with_overrides(chair_overrides)
    if not (chair_overrides and "center_x" in chair_overrides):
        chair = ChairAnchor(
            center_x=art.right_edge + CHAIR_GAP_RIGHT_OF_ART,
            width=chair.width,
            height=chair.height,
            floor_offset=chair.floor_offset,
        )
    chair = ChairAnchor(
        center_x=chair.center_x - chair_nudge,
        width=chair.width,
        height=chair.height,
        floor_offset=chair.floor_offset,
    )

    factor = _desktop_art_zoom_overrides(mapping.art_zoom_factor, dims, viewport_width)

    base_zoom = zoom_fit(viewport_width, viewport_height) * zoom_multiplier
    max_zoom_to_see_floor = viewport_height / (2 * (seam_y - WORLD_HEIGHT / 2))
    if base_zoom > 0:
        factor = min(factor, max_zoom_to_see_floor / base_zoom)
    zoom = base_zoom * factor

    if viewport_width <= W_TABLET and art.width > 0:
        zoom = min(zoom, viewport_width * MOBILE_ART_WIDTH_RATIO / art.width)

    world_offset_x = viewport_width / 2 - (WORLD_WIDTH / 2) * zoom
    if viewport_width > W_MOBILE and dims is not None and dims.any_edge_at_least(LARGE_ART_CM):
        focus_y = seam_y * LARGE_ART_FOCUS_RATIO
    else:
        focus_y = WORLD_HEIGHT / 2
    world_offset_y = viewport_height / 2 - focus_y * zoom

    pad = math.ceil(max(
        MIN_BACKGROUND_PAD,
        viewport_width / (2 * zoom) - WORLD_WIDTH / 2,
        viewport_height / (2 * zoom) - WORLD_HEIGHT / 2,
    ))

    logger.debug(
        f"Layout {viewport_width:.0f}x{viewport_height:.0f}: zoom={zoom:.4f}, "
        f"seam={seam_y:g}, art_factor={factor:.3f}, nudge={chair_nudge:.1f}"
    )

    return SceneLayout(
        viewport_width=viewport_width,
        viewport_height=viewport_height,
        seam_y=seam_y,
        art=art,
        chair=chair,
        art_zoom_factor=factor,
        zoom_multiplier=zoom_multiplier,
        chair_nudge=chair_nudge,
        zoom=zoom,
        world_offset_x=world_offset_x,
        world_offset_y=world_offset_y,
        background_pad=float(pad),
    )


def compute_layout(
    viewport_width: float,
    viewport_height: float,
    dims: Optional[PhysicalDimensions] = None,
    art_overrides: Optional[Mapping[str, float]] = None,
) -> Layout:
    """Projection-only result: zoom, world offset and chair nudge."""
    return compute_scene_layout(viewport_width, viewport_height, dims, art_overrides).layout
