"""
In-Situ Canvas (Render Loop)
============================
The widget that owns the frame: it loads the two bitmaps, keeps the cached
noise texture, recomputes the layout and repaints the device-pixel buffer.

Why is this file needed?
------------------------
1. Triggers: A frame is rendered when the widget is shown, when any scene
   property changes, when an image load resolves and when the widget resizes.
2. Coalescing: Resize notifications restart a single-shot timer set to one
   display refresh, so a drag paints at most once per frame.
3. Stale loads: Every bitmap slot carries a generation counter. A load that
   resolves after a newer request for the same slot is dropped.

Classes:
    InSituCanvas: QWidget rendering the room scene.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from functools import partial
from typing import Any, Optional

from PySide6.QtCore import QPointF, QTimer, Qt, Signal
from PySide6.QtGui import QImage, QPainter
from PySide6.QtWidgets import QWidget

from artinsitu.model.layout import SceneLayout, compute_scene_layout
from artinsitu.model.props import SceneProps
from artinsitu.view.assets import AssetLoader, ImageRequest
from artinsitu.view.compositor import paint
from artinsitu.view.noise import create_noise_texture
from artinsitu.view.surface import PainterSurface

logger = logging.getLogger(__name__)

ARTWORK_SLOT = "artwork"
CHAIR_SLOT = "chair"

DEFAULT_REFRESH_HZ = 60.0


class InSituCanvas(QWidget):
    """Full-bleed canvas showing the artwork on a wall, to scale."""

    frame_rendered = Signal()
    # no image load in flight
    assets_settled = Signal()

    def __init__(
        self,
        props: Optional[SceneProps] = None,
        parent: Optional[QWidget] = None,
        loader: Optional[AssetLoader] = None,
    ) -> None:
        super().__init__(parent=parent)
        self.setAttribute(Qt.WA_OpaquePaintEvent, True)

        self._props: SceneProps = props or SceneProps()
        self._loader: AssetLoader = loader or AssetLoader(self)

        # bitmap slots, owned here only
        self._images: dict[str, Optional[QImage]] = {ARTWORK_SLOT: None, CHAIR_SLOT: None}
        self._sources: dict[str, Optional[str]] = {ARTWORK_SLOT: None, CHAIR_SLOT: None}
        self._generation: dict[str, int] = {ARTWORK_SLOT: 0, CHAIR_SLOT: 0}
        self._pending: set[str] = set()

        self._noise: Optional[QImage] = None
        self._buffer: QImage = QImage()
        self._scene: Optional[SceneLayout] = None
        self._dpr_override: Optional[float] = None

        self._resize_timer = QTimer(self)
        self._resize_timer.setSingleShot(True)
        self._resize_timer.setInterval(self._frame_interval_ms())
        self._resize_timer.timeout.connect(self.render_frame)

        self._sync_sources()

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    @property
    def props(self) -> SceneProps:
        return self._props

    @property
    def scene(self) -> Optional[SceneLayout]:
        """Layout of the last rendered frame."""
        return self._scene

    def image(self, slot: str) -> Optional[QImage]:
        return self._images[slot]

    def is_loading(self) -> bool:
        return bool(self._pending)

    def set_props(self, props: SceneProps) -> None:
        """Replace all scene properties and re-render."""
        self._props = props
        self._sync_sources()
        self.render_frame()

    def update_props(self, **changes: Any) -> None:
        """Replace some scene properties, e.g. `update_props(show_debug=True)`."""
        self.set_props(replace(self._props, **changes))

    def set_device_pixel_ratio(self, dpr: Optional[float]) -> None:
        """Force a device pixel ratio (headless export). None follows the screen."""
        self._dpr_override = dpr

    def schedule_render(self) -> None:
        """Render on the next display refresh, replacing any unfired schedule."""
        self._resize_timer.start()

    def render_frame(self) -> None:
        """
        Recompute the layout and repaint the pixel buffer.

        Silently skipped while the widget has no area.
        """
        self._resize_timer.stop()
        css_w, css_h = self.width(), self.height()
        if css_w <= 0 or css_h <= 0:
            logger.debug("Canvas has no area yet, skipping frame.")
            return

        if self._noise is None:
            self._noise = create_noise_texture()

        dpr = self._dpr_override or self.devicePixelRatioF() or 1.0
        device_w = round(css_w * dpr)
        device_h = round(css_h * dpr)
        if self._buffer.width() != device_w or self._buffer.height() != device_h:
            self._buffer = QImage(device_w, device_h, QImage.Format_ARGB32_Premultiplied)
        # paint in raw device pixels; paint() applies dpr itself
        self._buffer.setDevicePixelRatio(1.0)

        props = self._props
        scene = compute_scene_layout(
            css_w, css_h, props.dimensions, props.artwork_anchor, props.chair_anchor
        )

        painter = QPainter(self._buffer)
        try:
            paint(
                PainterSurface(painter),
                scene,
                (device_w, device_h),
                dpr,
                noise=self._noise,
                art_image=self._images[ARTWORK_SLOT],
                chair_image=self._images[CHAIR_SLOT],
                wall_colors=props.wall_colors,
                floor_colors=props.floor_colors,
                show_chair=props.show_chair,
                show_debug=props.show_debug,
                dims=props.dimensions,
            )
        finally:
            painter.end()
        self._buffer.setDevicePixelRatio(dpr)

        self._scene = scene
        self.update()
        self.frame_rendered.emit()

    def grab_frame(self) -> QImage:
        """Copy of the last rendered device-pixel buffer."""
        return self._buffer.copy()

    # ------------------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------------------

    def showEvent(self, event) -> None:
        super().showEvent(event)
        self.render_frame()

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        self.schedule_render()

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        if self._buffer.isNull():
            painter.fillRect(self.rect(), Qt.black)
        else:
            painter.drawImage(QPointF(0.0, 0.0), self._buffer)
        painter.end()

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _frame_interval_ms(self) -> int:
        screen = self.screen()
        hz = screen.refreshRate() if screen is not None else 0.0
        if hz <= 0:
            hz = DEFAULT_REFRESH_HZ
        return max(1, int(1000.0 / hz))

    def _sync_sources(self) -> None:
        """Start a load for every slot whose source changed."""
        wanted = {ARTWORK_SLOT: self._props.artwork_src, CHAIR_SLOT: self._props.chair_src}
        for slot, source in wanted.items():
            if source != self._sources[slot]:
                self._request_image(slot, source)

    def _request_image(self, slot: str, source: str) -> None:
        self._sources[slot] = source
        self._generation[slot] += 1
        self._pending.add(slot)
        request: ImageRequest = self._loader.load(source)
        request.finished.connect(partial(self._on_image_loaded, slot, self._generation[slot]))

    def _on_image_loaded(self, slot: str, generation: int, image: Optional[QImage]) -> None:
        if generation != self._generation[slot]:
            logger.debug(f"Dropping stale {slot} image (generation {generation}).")
            return
        self._images[slot] = image
        self._pending.discard(slot)
        self.render_frame()
        if not self._pending:
            self.assets_settled.emit()
