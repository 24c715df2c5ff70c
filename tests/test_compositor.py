import pytest
from PySide6.QtGui import QImage, QPainter

from artinsitu.model.layout import compute_scene_layout
from artinsitu.model.scene import ColorPair, PhysicalDimensions
from artinsitu.view.compositor import (
    BASEBOARD_HEIGHT,
    PLACEHOLDER_STOPS,
    debug_lines,
    draw_artwork,
    draw_chair,
    paint,
)
from artinsitu.view.surface import DrawingSurface, PainterSurface, contain_fit


class RecordingSurface(DrawingSurface):
    """Keeps (method, args) for every call instead of drawing."""

    def __init__(self):
        self.calls = []

    def _record(self, name, *args):
        self.calls.append((name, args))

    def set_transform(self, scale, dx, dy):
        self._record("set_transform", scale, dx, dy)

    def fill_rect(self, rect, color):
        self._record("fill_rect", rect, color)

    def linear_gradient_fill(self, rect, start, end, stops):
        self._record("linear_gradient_fill", rect, start, end, stops)

    def radial_gradient_fill(self, rect, focal, focal_radius, center, radius, stops):
        self._record("radial_gradient_fill", rect, focal, focal_radius, center, radius, stops)

    def pattern_fill(self, rect, pattern, alpha):
        self._record("pattern_fill", rect, pattern, alpha)

    def draw_image_fit(self, box, image):
        self._record("draw_image_fit", box, image)
        return contain_fit(box, image.width(), image.height())

    def draw_shadowed_rect(self, rect, fill, shadow_color, blur, offset):
        self._record("draw_shadowed_rect", rect, fill, shadow_color, blur, offset)

    def fill_rounded_rect(self, rect, radius, color):
        self._record("fill_rounded_rect", rect, radius, color)

    def fill_text(self, x, y, text, color, pixel_size=12):
        self._record("fill_text", x, y, text, color)

    def names(self):
        return [name for name, _ in self.calls]


@pytest.fixture
def scene():
    return compute_scene_layout(1280, 720)


def _image(w, h, color=0xFF336699):
    image = QImage(w, h, QImage.Format_ARGB32_Premultiplied)
    image.fill(color)
    return image


# -------------------------------------------------------------------------------
# contain_fit
# -------------------------------------------------------------------------------

def test_wide_image_fills_width_and_sits_on_bottom():
    assert contain_fit((0, 0, 400, 300), 800, 300) == (0, 150, 400, 150)


def test_tall_image_fills_height_and_is_centred():
    assert contain_fit((0, 0, 400, 300), 100, 200) == (125, 0, 150, 300)


def test_matching_aspect_fills_box():
    assert contain_fit((10, 20, 400, 300), 800, 600) == (10, 20, 400, 300)


# -------------------------------------------------------------------------------
# Layers
# -------------------------------------------------------------------------------

def test_frame_starts_with_device_fill_then_world_transform(scene):
    surface = RecordingSurface()
    paint(surface, scene, (1280, 720))

    assert surface.calls[0] == ("set_transform", (1.0, 0.0, 0.0))
    assert surface.calls[1] == ("fill_rect", ((0.0, 0.0, 1280.0, 720.0), "#f8f7f6"))
    assert surface.calls[2] == ("set_transform", scene.world_to_device(1.0))


def test_artwork_is_painted_before_chair(qapp, scene):
    surface = RecordingSurface()
    art, chair = _image(40, 30), _image(20, 20)
    paint(surface, scene, (1280, 720), art_image=art, chair_image=chair)

    images = [args[1] for name, args in surface.calls if name == "draw_image_fit"]
    assert images == [art, chair]


def test_hidden_chair_is_not_painted(qapp, scene):
    surface = RecordingSurface()
    chair = _image(20, 20)
    paint(surface, scene, (1280, 720), chair_image=chair, show_chair=False)

    assert all(args[1] is not chair for name, args in surface.calls if name == "draw_image_fit")
    chair_box = scene.chair.box(scene.seam_y)
    assert all(args[0] != chair_box for name, args in surface.calls if name == "fill_rect")


def test_debug_overlay_is_last_and_in_screen_space(scene):
    surface = RecordingSurface()
    paint(surface, scene, (2560, 1440), 2.0, show_debug=True)

    transforms = [args for name, args in surface.calls if name == "set_transform"]
    assert transforms[-1] == (2.0, 0.0, 0.0)
    overlay_start = surface.calls.index(("set_transform", (2.0, 0.0, 0.0)))
    tail = surface.names()[overlay_start + 1:]
    assert tail[0] == "fill_rounded_rect"
    assert set(tail[1:]) == {"fill_text"}


def test_no_overlay_without_debug(scene):
    surface = RecordingSurface()
    paint(surface, scene, (1280, 720))
    assert "fill_text" not in surface.names()


def test_grain_layer_needs_noise(qapp, scene):
    surface = RecordingSurface()
    paint(surface, scene, (1280, 720))
    assert "pattern_fill" not in surface.names()

    surface = RecordingSurface()
    paint(surface, scene, (1280, 720), noise=_image(8, 8, 0xFF808080))
    alphas = [args[2] for name, args in surface.calls if name == "pattern_fill"]
    assert alphas == [0.025, 0.035]


def test_custom_floor_darkens_baseboard(scene):
    surface = RecordingSurface()
    paint(surface, scene, (1280, 720), floor_colors=ColorPair("#cccccc", "#9a9792"))
    fills = [args for name, args in surface.calls if name == "fill_rect"]
    baseboard = [color for rect, color in fills if rect[3] == BASEBOARD_HEIGHT]
    assert baseboard == ["#8b8883"]


# -------------------------------------------------------------------------------
# Artwork and chair
# -------------------------------------------------------------------------------

def test_placeholder_fills_whole_art_box(scene):
    surface = RecordingSurface()
    drawn = draw_artwork(surface, scene.art, scene.seam_y, None)

    assert drawn == scene.art.box(scene.seam_y)
    name, args = surface.calls[0]
    assert name == "draw_shadowed_rect"
    assert args[0] == drawn
    assert args[1] == PLACEHOLDER_STOPS


def test_artwork_shadows_hug_the_fitted_image(qapp, scene):
    surface = RecordingSurface()
    image = _image(200, 50)
    drawn = draw_artwork(surface, scene.art, scene.seam_y, image)

    box = scene.art.box(scene.seam_y)
    assert drawn == contain_fit(box, 200, 50)
    assert surface.names() == ["draw_shadowed_rect", "draw_shadowed_rect", "draw_image_fit"]
    assert surface.calls[0][1][0] == drawn
    assert surface.calls[0][1][1] is None
    assert surface.calls[1][1][1] == "#ffffff"


def test_empty_image_counts_as_missing(qapp, scene):
    surface = RecordingSurface()
    drawn = draw_artwork(surface, scene.art, scene.seam_y, QImage())
    assert drawn == scene.art.box(scene.seam_y)
    assert "draw_image_fit" not in surface.names()


def test_chair_placeholder_stands_on_floor(scene):
    surface = RecordingSurface()
    drawn = draw_chair(surface, scene.chair, scene.seam_y, None)
    x, y, w, h = drawn
    assert y + h == scene.chair.feet_y(scene.seam_y)
    assert surface.names() == ["fill_rect"]


# -------------------------------------------------------------------------------
# Debug text
# -------------------------------------------------------------------------------

def test_debug_lines_report_layout():
    dims = PhysicalDimensions(120, 90)
    scene = compute_scene_layout(1280, 720, dims)
    lines = debug_lines(scene, dims, 2.0)

    assert lines[0] == "Viewport: 1280 × 720 CSS px"
    assert "WORLD: 1600 × 900" in lines
    assert "Dimensions: 120 × 90 cm" in lines
    assert lines[-1] == "DPR: 2"
    assert any(line.startswith("Chair floorOffset:") for line in lines)


def test_debug_lines_skip_missing_dimensions(scene):
    lines = debug_lines(scene, None, 1.0)
    assert not any(line.startswith("Dimensions:") for line in lines)


# -------------------------------------------------------------------------------
# Real pixels
# -------------------------------------------------------------------------------

def test_painted_frame_shows_placeholder_on_wall(qapp):
    scene = compute_scene_layout(800, 450)
    image = QImage(800, 450, QImage.Format_ARGB32_Premultiplied)
    image.fill(0)
    painter = QPainter(image)
    try:
        paint(PainterSurface(painter), scene, (800, 450))
    finally:
        painter.end()

    zoom, dx, dy = scene.world_to_device(1.0)
    x, y, w, h = scene.art.box(scene.seam_y)
    centre = image.pixelColor(int(zoom * (x + w / 2) + dx), int(zoom * (y + h / 2) + dy))
    corner = image.pixelColor(2, 2)

    assert centre.alpha() == 255
    assert centre.green() > centre.red() + 10
    assert corner.alpha() == 255
    assert corner.red() > 200 and corner.green() > 200
