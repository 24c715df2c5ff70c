"""
Scene Compositor
================
Paints one frame of the room scene onto a DrawingSurface.

Why is this file needed?
------------------------
1. Layering: Background, artwork, chair and the debug overlay are always
   painted in the same order, later layers over earlier ones.
2. Degradation: A missing bitmap (pending or failed load) is replaced by a
   placeholder, so the scene is never blank.
3. Purity: The compositor reads only its arguments. It never triggers
   loading and keeps no state between frames.

Functions:
    paint: Paint a whole frame.
    draw_background: Wall, floor, seam shading, grain and bounce light.
    draw_artwork: Artwork image (or placeholder) with shadows.
    draw_chair: Chair image (or placeholder) standing on the floor.
    debug_lines: Text lines of the debug overlay.
"""
from __future__ import annotations

from typing import Optional

from PySide6.QtGui import QImage

from artinsitu.model.layout import SceneLayout
from artinsitu.model.scene import (
    ArtworkAnchor,
    BASEBOARD_COLOR,
    BASEBOARD_DARKEN_FACTOR,
    ChairAnchor,
    ColorPair,
    FLOOR_COLORS,
    PhysicalDimensions,
    WALL_COLORS,
    WORLD_HEIGHT,
    WORLD_WIDTH,
)
from artinsitu.utils import darken_hex
from artinsitu.view.surface import DrawingSurface, Rect, contain_fit

TRANSPARENT = (0, 0, 0, 0.0)

AO_ABOVE_SEAM: float = 30.0
AO_BAND_HEIGHT: float = 70.0
BASEBOARD_HEIGHT: float = 8.0
WALL_GRAIN_ALPHA: float = 0.025
FLOOR_GRAIN_ALPHA: float = 0.035

PLACEHOLDER_STOPS = [(0.0, "#6b8f71"), (0.5, "#a3c4a8"), (1.0, "#8b6f47")]
CHAIR_PLACEHOLDER_COLOR = (60, 48, 38, 0.6)

DEBUG_MARGIN: float = 10.0
DEBUG_PADDING: float = 10.0
DEBUG_LINE_HEIGHT: float = 17.0
DEBUG_PANEL_WIDTH: float = 380.0


# -------------------------------------------------------------------------------
# Background
# -------------------------------------------------------------------------------

def draw_background(
    surface: DrawingSurface,
    noise: Optional[QImage],
    seam_y: float,
    pad: float = 800.0,
    wall_colors: Optional[ColorPair] = None,
    floor_colors: Optional[ColorPair] = None,
) -> None:
    """
    Wall and floor gradients, padded `pad` units past the world on every side
    so zooming out never shows bare canvas.
    """
    wall = wall_colors or WALL_COLORS
    floor = floor_colors or FLOOR_COLORS

    left, right = -pad, WORLD_WIDTH + pad
    top, bottom = -pad, WORLD_HEIGHT + pad
    width = right - left
    wall_rect: Rect = (left, top, width, seam_y - top)
    floor_rect: Rect = (left, seam_y, width, bottom - seam_y)

    surface.linear_gradient_fill(
        wall_rect, (0.0, top), (0.0, seam_y),
        [(0.0, wall.top), (0.7, wall.bottom), (1.0, wall.bottom)],
    )
    surface.linear_gradient_fill(
        floor_rect, (0.0, seam_y), (0.0, bottom),
        [(0.0, floor.top), (1.0, floor.bottom)],
    )

    # ambient occlusion straddling the seam
    ao_top = seam_y - AO_ABOVE_SEAM
    surface.linear_gradient_fill(
        (left, ao_top, width, AO_BAND_HEIGHT), (0.0, ao_top), (0.0, ao_top + AO_BAND_HEIGHT),
        [(0.0, TRANSPARENT), (0.4, (0, 0, 0, 0.04)), (0.6, (0, 0, 0, 0.06)), (1.0, TRANSPARENT)],
    )

    baseboard = darken_hex(floor.bottom, BASEBOARD_DARKEN_FACTOR) if floor_colors else BASEBOARD_COLOR
    surface.fill_rect((left, seam_y - BASEBOARD_HEIGHT, width, BASEBOARD_HEIGHT), baseboard)
    surface.fill_rect((left, seam_y - BASEBOARD_HEIGHT, width, 1.0), (255, 255, 255, 0.12))
    surface.fill_rect((left, seam_y, width, 1.0), (0, 0, 0, 0.08))

    if noise is not None and not noise.isNull():
        surface.pattern_fill(wall_rect, noise, WALL_GRAIN_ALPHA)
        surface.pattern_fill(floor_rect, noise, FLOOR_GRAIN_ALPHA)

    surface.radial_gradient_fill(
        floor_rect,
        (WORLD_WIDTH / 2, seam_y), 0.0,
        (WORLD_WIDTH / 2, seam_y + 200.0), WORLD_WIDTH * 0.6,
        [(0.0, (255, 255, 255, 0.06)), (1.0, (255, 255, 255, 0.0))],
    )


# -------------------------------------------------------------------------------
# Scene objects
# -------------------------------------------------------------------------------

def _has_pixels(image: Optional[QImage]) -> bool:
    return image is not None and not image.isNull() and image.width() > 0 and image.height() > 0


def draw_artwork(
    surface: DrawingSurface,
    art: ArtworkAnchor,
    seam_y: float,
    image: Optional[QImage],
) -> Rect:
    """
    Paint the artwork inside its anchor box and return the painted rect.

    The image is contain-fitted, never cropped. Without an image a gradient
    placeholder fills the whole box.
    """
    box = art.box(seam_y)

    if not _has_pixels(image):
        surface.draw_shadowed_rect(box, PLACEHOLDER_STOPS, (0, 0, 0, 0.25), 24.0, (0.0, 6.0))
        return box

    drawn = contain_fit(box, image.width(), image.height())
    # wide drop shadow, then the tight matting shadow under the image
    surface.draw_shadowed_rect(drawn, None, (0, 0, 0, 0.28), 32.0, (0.0, 6.0))
    surface.draw_shadowed_rect(drawn, "#ffffff", (0, 0, 0, 0.6), 8.0, (4.0, 4.0))
    surface.draw_image_fit(box, image)
    return drawn


def draw_chair(
    surface: DrawingSurface,
    chair: ChairAnchor,
    seam_y: float,
    image: Optional[QImage],
) -> Rect:
    """Paint the chair standing `floor_offset` below the seam and return its box."""
    box = chair.box(seam_y)
    if _has_pixels(image):
        return surface.draw_image_fit(box, image)
    surface.fill_rect(box, CHAIR_PLACEHOLDER_COLOR)
    return box


# -------------------------------------------------------------------------------
# Debug overlay
# -------------------------------------------------------------------------------

def debug_lines(
    scene: SceneLayout,
    dims: Optional[PhysicalDimensions],
    device_pixel_ratio: float,
) -> list[str]:
    art, chair, seam_y = scene.art, scene.chair, scene.seam_y
    lines = [
        f"Viewport: {round(scene.viewport_width)} × {round(scene.viewport_height)} CSS px",
        f"zoom: {scene.zoom:.4f}",
        f"WORLD: {WORLD_WIDTH:g} × {WORLD_HEIGHT:g}",
        f"seamY: {seam_y:g}",
    ]
    if dims is not None:
        lines.append(f"Dimensions: {dims.width_cm:g} × {dims.height_cm:g} cm")
    lines.append(f"Art zoom factor: {scene.art_zoom_factor:.3f}")
    lines.append(f"Art: {art.width:.0f}×{art.height:.0f} px  bottomGap: {art.bottom_gap:g}")
    lines.append(f"Chair floorOffset: {chair.floor_offset:g}  (feet at y={chair.feet_y(seam_y):g})")
    lines.append(f"DPR: {device_pixel_ratio:g}")
    return lines


def draw_debug_overlay(surface: DrawingSurface, lines: list[str]) -> None:
    """Rounded panel at the top-left, one monospace line per field. Screen space."""
    panel_h = len(lines) * DEBUG_LINE_HEIGHT + DEBUG_PADDING * 2
    surface.fill_rounded_rect(
        (DEBUG_MARGIN, DEBUG_MARGIN, DEBUG_PANEL_WIDTH, panel_h), 6.0, (0, 0, 0, 0.6)
    )
    for i, line in enumerate(lines):
        surface.fill_text(
            DEBUG_MARGIN + DEBUG_PADDING,
            DEBUG_MARGIN + DEBUG_PADDING + i * DEBUG_LINE_HEIGHT,
            line,
            "#ffffff",
        )


# -------------------------------------------------------------------------------
# Frame
# -------------------------------------------------------------------------------

def paint(
    surface: DrawingSurface,
    scene: SceneLayout,
    device_size: tuple[int, int],
    device_pixel_ratio: float = 1.0,
    *,
    noise: Optional[QImage] = None,
    art_image: Optional[QImage] = None,
    chair_image: Optional[QImage] = None,
    wall_colors: Optional[ColorPair] = None,
    floor_colors: Optional[ColorPair] = None,
    show_chair: bool = True,
    show_debug: bool = False,
    dims: Optional[PhysicalDimensions] = None,
) -> None:
    """
    Paint a full frame.

    Args:
        surface: Target drawing surface, covering `device_size` device pixels.
        scene: Per-frame layout from compute_scene_layout.
        device_size: (width, height) of the pixel buffer.
        device_pixel_ratio: Device pixels per CSS pixel.
        noise: Cached grain texture, or None to skip the grain layer.
        art_image: Decoded artwork, or None for the placeholder.
        chair_image: Decoded chair, or None for the placeholder.
        wall_colors: Wall gradient override.
        floor_colors: Floor gradient override (also drives the baseboard colour).
        show_chair: Skip the chair layer entirely when False.
        show_debug: Draw the screen-space debug overlay.
        dims: Physical size, shown in the debug overlay.
    """
    wall = wall_colors or WALL_COLORS

    # flat fill in device pixels hides any edge left by the transform
    surface.set_transform(1.0, 0.0, 0.0)
    surface.fill_rect((0.0, 0.0, float(device_size[0]), float(device_size[1])), wall.top)

    surface.set_transform(*scene.world_to_device(device_pixel_ratio))
    draw_background(surface, noise, scene.seam_y, scene.background_pad, wall_colors, floor_colors)
    draw_artwork(surface, scene.art, scene.seam_y, art_image)
    if show_chair:
        draw_chair(surface, scene.chair, scene.seam_y, chair_image)

    if show_debug:
        surface.set_transform(device_pixel_ratio, 0.0, 0.0)
        draw_debug_overlay(surface, debug_lines(scene, dims, device_pixel_ratio))
