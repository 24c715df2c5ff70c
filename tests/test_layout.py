import pytest

from artinsitu.model.dimensions import ART_ZOOM_FACTOR_MIN
from artinsitu.model.layout import (
    compute_layout,
    compute_scene_layout,
    responsive_factors,
    smoothstep,
    zoom_fit,
)
from artinsitu.model.scene import (
    CHAIR_GAP_RIGHT_OF_ART,
    DEFAULT_ART,
    PhysicalDimensions,
    SEAM_Y,
    WORLD_HEIGHT,
    WORLD_WIDTH,
)


def test_smoothstep_is_clamped_hermite():
    assert smoothstep(-1.0) == 0.0
    assert smoothstep(0.5) == 0.5
    assert smoothstep(2.0) == 1.0
    assert smoothstep(0.25) == pytest.approx(3 * 0.0625 - 2 * 0.015625)


@pytest.mark.parametrize("width, expected", [
    (100, (2.95, 350.0)),
    (380, (2.95, 350.0)),
    (768, (1.65, 230.0)),
    (1400, (1.0, 0.0)),
    (2560, (1.0, 0.0)),
])
def test_responsive_factors_at_breakpoints(width, expected):
    zoom_multiplier, nudge = responsive_factors(width)
    assert zoom_multiplier == pytest.approx(expected[0])
    assert nudge == pytest.approx(expected[1])


def test_responsive_factors_are_continuous_and_non_increasing():
    previous_zoom, previous_nudge = responsive_factors(0)
    width = 0.5
    while width <= 1600:
        zoom_multiplier, nudge = responsive_factors(width)
        assert zoom_multiplier <= previous_zoom + 1e-12
        assert nudge <= previous_nudge + 1e-12
        # no visible snap between neighbouring widths
        assert abs(zoom_multiplier - previous_zoom) < 0.01
        assert abs(nudge - previous_nudge) < 1.0
        previous_zoom, previous_nudge = zoom_multiplier, nudge
        width += 0.5


def test_responsive_factors_midpoint_interpolates():
    zoom_multiplier, nudge = responsive_factors((380 + 768) / 2)
    assert zoom_multiplier == pytest.approx((2.95 + 1.65) / 2)
    assert nudge == pytest.approx((350 + 230) / 2)


def test_compute_layout_is_idempotent():
    dims = PhysicalDimensions(150, 120)
    first = compute_scene_layout(1280, 720, dims, {"center_x": 700})
    second = compute_scene_layout(1280, 720, dims, {"center_x": 700})
    assert first == second
    assert compute_layout(1280, 720, dims) == compute_layout(1280, 720, dims)


def test_scenario_a_desktop_without_dimensions():
    scene = compute_scene_layout(1920, 1080)
    assert scene.zoom == pytest.approx(zoom_fit(1920, 1080) * 1 * 1)
    assert scene.seam_y == SEAM_Y
    assert scene.chair_nudge == 0
    assert scene.art == DEFAULT_ART
    assert scene.chair.center_x == pytest.approx(
        scene.art.center_x + scene.art.width / 2 + CHAIR_GAP_RIGHT_OF_ART
    )
    # world centred both ways
    assert scene.world_offset_x == pytest.approx(1920 / 2 - WORLD_WIDTH / 2 * scene.zoom)
    assert scene.world_offset_y == pytest.approx(1080 / 2 - WORLD_HEIGHT / 2 * scene.zoom)


def test_scenario_b_large_artwork_shares_minimum_scale():
    dims = PhysicalDimensions(300, 400)
    scene = compute_scene_layout(1920, 1080, dims)
    assert scene.seam_y == SEAM_Y
    assert scene.art_zoom_factor == pytest.approx(ART_ZOOM_FACTOR_MIN)
    assert scene.zoom == pytest.approx(zoom_fit(1920, 1080) * ART_ZOOM_FACTOR_MIN)
    # large pieces focus on the upper wall
    assert scene.world_offset_y == pytest.approx(1080 / 2 - SEAM_Y * 0.25 * scene.zoom)


def test_shared_scale_family_only_on_desktop():
    dims = PhysicalDimensions(263, 325)
    assert compute_scene_layout(1920, 1080, dims).art_zoom_factor == pytest.approx(ART_ZOOM_FACTOR_MIN)
    assert compute_scene_layout(1024, 768, dims).art_zoom_factor > ART_ZOOM_FACTOR_MIN


def test_scenario_c_mobile_default_dimensions():
    scene = compute_scene_layout(320, 640)
    assert scene.zoom_multiplier == pytest.approx(2.95)
    assert scene.chair_nudge == pytest.approx(350)
    assert scene.art.width * scene.zoom <= 0.9 * 320 + 1e-9
    assert scene.chair.center_x == pytest.approx(
        DEFAULT_ART.right_edge + CHAIR_GAP_RIGHT_OF_ART - 350
    )


def test_mobile_containment_caps_wide_artwork():
    dims = PhysicalDimensions(250, 150)
    scene = compute_scene_layout(360, 800, dims)
    assert scene.zoom == pytest.approx(360 * 0.9 / scene.art.width)


def test_small_art_gets_desktop_boost():
    dims = PhysicalDimensions(96, 80)
    desktop = compute_scene_layout(1920, 1080, dims)
    tablet = compute_scene_layout(1000, 1080, dims)
    assert desktop.art_zoom_factor == pytest.approx(1.25)
    assert tablet.art_zoom_factor == pytest.approx(1.0)


def test_floor_stays_visible_on_short_viewports():
    scene = compute_scene_layout(380, 200)
    max_zoom = 200 / (2 * (scene.seam_y - WORLD_HEIGHT / 2))
    assert scene.zoom == pytest.approx(max_zoom)
    assert scene.art_zoom_factor < 1.0
    # seam lands inside the viewport
    seam_screen_y = scene.world_offset_y + scene.seam_y * scene.zoom
    assert seam_screen_y <= 200 + 1e-6


def test_floor_clamp_leaves_tall_viewports_alone():
    scene = compute_scene_layout(1920, 300, PhysicalDimensions(30, 20))
    assert scene.art_zoom_factor == pytest.approx(1.12 * 1.25)


def test_large_art_lowers_seam_and_chair_follows_art():
    dims = PhysicalDimensions(250, 180)
    scene = compute_scene_layout(1920, 1080, dims)
    assert scene.seam_y == 800
    assert scene.chair.center_x == pytest.approx(scene.art.right_edge + CHAIR_GAP_RIGHT_OF_ART)


def test_anchor_overrides():
    scene = compute_scene_layout(
        1920, 1080, None, {"center_x": 500.0, "bottom_gap": 150.0}, {"floor_offset": 40.0}
    )
    assert scene.art.center_x == 500.0
    assert scene.art.bottom_gap == 150.0
    assert scene.chair.floor_offset == 40.0
    assert scene.chair.center_x == pytest.approx(500.0 + 414.0 / 2 + CHAIR_GAP_RIGHT_OF_ART)

    pinned = compute_scene_layout(1920, 1080, None, None, {"center_x": 1200.0})
    assert pinned.chair.center_x == 1200.0


def test_unknown_override_and_empty_viewport_raise():
    with pytest.raises(ValueError):
        compute_scene_layout(1920, 1080, None, {"depth": 3.0})
    with pytest.raises(ValueError):
        compute_scene_layout(0, 1080)


def test_background_pad_covers_viewport_when_zoomed_out():
    scene = compute_scene_layout(1920, 1080, PhysicalDimensions(300, 400))
    assert scene.background_pad >= 800
    visible_half_w = 1920 / (2 * scene.zoom)
    assert scene.background_pad >= visible_half_w - WORLD_WIDTH / 2


def test_world_to_device_composes_dpr():
    scene = compute_scene_layout(1920, 1080)
    scale, dx, dy = scene.world_to_device(2.0)
    assert scale == pytest.approx(2.0 * scene.zoom)
    assert (dx, dy) == (pytest.approx(2.0 * scene.world_offset_x), pytest.approx(2.0 * scene.world_offset_y))
