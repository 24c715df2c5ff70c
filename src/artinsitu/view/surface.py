"""
Drawing Surface
===============
The minimal 2D immediate-mode capability the compositor paints through.

Why is this file needed?
------------------------
1. Decoupling: The compositor only needs a handful of primitives (rect fill,
   gradient fills, pattern fill, fitted images, soft shadows, text). Keeping
   them behind one interface lets tests record draw calls without a screen.
2. Qt specifics: QPainter has no blurred shadow. PainterSurface builds one
   from gradient patches, the way CSS box-shadows are usually approximated.

Classes:
    DrawingSurface: Abstract capability set.
    PainterSurface: QPainter-backed implementation.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence, Union

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import (
    QBrush,
    QColor,
    QFont,
    QImage,
    QLinearGradient,
    QPainter,
    QRadialGradient,
    QTransform,
)

# "#rrggbb" or (r, g, b, alpha in [0, 1])
ColorSpec = Union[str, tuple[int, int, int, float]]
GradientStops = Sequence[tuple[float, ColorSpec]]
Rect = tuple[float, float, float, float]

_SHADOW_STEPS = 6


def to_qcolor(spec: ColorSpec) -> QColor:
    if isinstance(spec, QColor):
        return QColor(spec)
    if isinstance(spec, str):
        return QColor(spec)
    r, g, b, a = spec
    color = QColor(int(r), int(g), int(b))
    color.setAlphaF(max(0.0, min(1.0, float(a))))
    return color


def _is_color(spec) -> bool:
    return isinstance(spec, (str, QColor)) or (isinstance(spec, tuple) and not isinstance(spec[0], tuple))


def contain_fit(box: Rect, image_width: float, image_height: float) -> Rect:
    """
    Fit an image inside a box without cropping, keeping its aspect ratio.

    Images wider than the box aspect fill the width and sit on the box's
    bottom edge. Others fill the height and are centred horizontally.

    Args:
        box: (x, y, w, h) target box.
        image_width: Natural image width (> 0).
        image_height: Natural image height (> 0).

    Returns:
        (x, y, w, h) of the drawn image.
    """
    x, y, w, h = box
    image_aspect = image_width / image_height
    box_aspect = w / h
    if image_aspect > box_aspect:
        draw_w = w
        draw_h = w / image_aspect
        return x, y + (h - draw_h), draw_w, draw_h
    draw_h = h
    draw_w = h * image_aspect
    return x + (w - draw_w) / 2, y, draw_w, draw_h


class DrawingSurface(ABC):
    """Immediate-mode drawing capability, in the current coordinate space."""

    @abstractmethod
    def set_transform(self, scale: float, dx: float, dy: float) -> None:
        """Replace the current transform with a uniform scale + translation."""

    @abstractmethod
    def fill_rect(self, rect: Rect, color: ColorSpec) -> None: ...

    @abstractmethod
    def linear_gradient_fill(
        self, rect: Rect, start: tuple[float, float], end: tuple[float, float], stops: GradientStops
    ) -> None: ...

    @abstractmethod
    def radial_gradient_fill(
        self,
        rect: Rect,
        focal: tuple[float, float],
        focal_radius: float,
        center: tuple[float, float],
        radius: float,
        stops: GradientStops,
    ) -> None:
        """Two-circle radial gradient, from the focal circle out to the outer circle."""

    @abstractmethod
    def pattern_fill(self, rect: Rect, pattern: QImage, alpha: float) -> None:
        """Tile `pattern` over rect at the given opacity."""

    @abstractmethod
    def draw_image_fit(self, box: Rect, image: QImage) -> Rect:
        """Contain-fit `image` in box and draw it. Returns the drawn rect."""

    @abstractmethod
    def draw_shadowed_rect(
        self,
        rect: Rect,
        fill: Optional[Union[ColorSpec, GradientStops]],
        shadow_color: ColorSpec,
        blur: float,
        offset: tuple[float, float],
    ) -> None:
        """
        Soft shadow under rect, then the rect itself.

        `fill` is a colour, diagonal gradient stops (top-left to bottom-right),
        or None to paint only the shadow.
        """

    @abstractmethod
    def fill_rounded_rect(self, rect: Rect, radius: float, color: ColorSpec) -> None: ...

    @abstractmethod
    def fill_text(self, x: float, y: float, text: str, color: ColorSpec, pixel_size: int = 12) -> None:
        """Monospace text with its top-left corner at (x, y)."""


class PainterSurface(DrawingSurface):
    """DrawingSurface over an active QPainter."""

    def __init__(self, painter: QPainter) -> None:
        self.painter = painter
        self.painter.setRenderHint(QPainter.Antialiasing, True)
        self.painter.setRenderHint(QPainter.SmoothPixmapTransform, True)

    def set_transform(self, scale: float, dx: float, dy: float) -> None:
        self.painter.setTransform(QTransform(scale, 0.0, 0.0, scale, dx, dy))

    def fill_rect(self, rect: Rect, color: ColorSpec) -> None:
        self.painter.fillRect(QRectF(*rect), to_qcolor(color))

    def linear_gradient_fill(self, rect, start, end, stops) -> None:
        gradient = QLinearGradient(QPointF(*start), QPointF(*end))
        for position, color in stops:
            gradient.setColorAt(position, to_qcolor(color))
        self.painter.fillRect(QRectF(*rect), QBrush(gradient))

    def radial_gradient_fill(self, rect, focal, focal_radius, center, radius, stops) -> None:
        gradient = QRadialGradient(QPointF(*center), radius, QPointF(*focal), focal_radius)
        for position, color in stops:
            gradient.setColorAt(position, to_qcolor(color))
        self.painter.fillRect(QRectF(*rect), QBrush(gradient))

    def pattern_fill(self, rect: Rect, pattern: QImage, alpha: float) -> None:
        if pattern is None or pattern.isNull():
            return
        self.painter.save()
        self.painter.setOpacity(alpha)
        self.painter.fillRect(QRectF(*rect), QBrush(pattern))
        self.painter.restore()

    def draw_image_fit(self, box: Rect, image: QImage) -> Rect:
        drawn = contain_fit(box, image.width(), image.height())
        self.painter.drawImage(QRectF(*drawn), image, QRectF(image.rect()))
        return drawn

    def draw_shadowed_rect(self, rect, fill, shadow_color, blur, offset) -> None:
        x, y, w, h = rect
        self._soft_shadow((x + offset[0], y + offset[1], w, h), to_qcolor(shadow_color), blur)
        if fill is None:
            return
        if _is_color(fill):
            self.fill_rect(rect, fill)
        else:
            self.linear_gradient_fill(rect, (x, y), (x + w, y + h), fill)

    def fill_rounded_rect(self, rect: Rect, radius: float, color: ColorSpec) -> None:
        self.painter.save()
        self.painter.setPen(Qt.NoPen)
        self.painter.setBrush(to_qcolor(color))
        self.painter.drawRoundedRect(QRectF(*rect), radius, radius)
        self.painter.restore()

    def fill_text(self, x: float, y: float, text: str, color: ColorSpec, pixel_size: int = 12) -> None:
        font = QFont("monospace")
        font.setStyleHint(QFont.Monospace)
        font.setPixelSize(pixel_size)
        self.painter.save()
        self.painter.setFont(font)
        self.painter.setPen(to_qcolor(color))
        metrics_h = self.painter.fontMetrics().height()
        self.painter.drawText(
            QRectF(x, y, 10_000.0, float(metrics_h)),
            Qt.AlignLeft | Qt.AlignTop,
            text,
        )
        self.painter.restore()

    # ---- soft shadow ----

    def _ramp(self, gradient, color: QColor, rising: bool) -> None:
        peak = color.alphaF()
        for i in range(_SHADOW_STEPS + 1):
            t = i / _SHADOW_STEPS
            s = t * t * (3.0 - 2.0 * t)
            stop = QColor(color)
            stop.setAlphaF(peak * (s if rising else 1.0 - s))
            gradient.setColorAt(t, stop)

    def _soft_shadow(self, rect: Rect, color: QColor, blur: float) -> None:
        """
        Approximate a blurred rectangle with a solid core, four linear edge
        ramps and four radial corner ramps, each `blur` wide on both sides of
        the rect outline.
        """
        x, y, w, h = rect
        if color.alphaF() <= 0.0 or w <= 0 or h <= 0:
            return
        if blur <= 0:
            self.painter.fillRect(QRectF(x, y, w, h), color)
            return

        # core shrinks by `blur`, never past the rect centre
        ix0, ix1 = x + min(blur, w / 2), x + w - min(blur, w / 2)
        iy0, iy1 = y + min(blur, h / 2), y + h - min(blur, h / 2)
        ox0, ox1 = x - blur, x + w + blur
        oy0, oy1 = y - blur, y + h + blur

        if ix1 > ix0 and iy1 > iy0:
            self.painter.fillRect(QRectF(ix0, iy0, ix1 - ix0, iy1 - iy0), color)

        edges = (
            # (rect, gradient start, gradient end)
            ((ix0, oy0, ix1 - ix0, iy0 - oy0), (ix0, oy0), (ix0, iy0)),
            ((ix0, iy1, ix1 - ix0, oy1 - iy1), (ix0, oy1), (ix0, iy1)),
            ((ox0, iy0, ix0 - ox0, iy1 - iy0), (ox0, iy0), (ix0, iy0)),
            ((ix1, iy0, ox1 - ix1, iy1 - iy0), (ox1, iy0), (ix1, iy0)),
        )
        for edge_rect, start, end in edges:
            if edge_rect[2] <= 0 or edge_rect[3] <= 0:
                continue
            gradient = QLinearGradient(QPointF(*start), QPointF(*end))
            self._ramp(gradient, color, rising=True)
            self.painter.fillRect(QRectF(*edge_rect), QBrush(gradient))

        corners = (
            ((ox0, oy0, ix0 - ox0, iy0 - oy0), (ix0, iy0)),
            ((ix1, oy0, ox1 - ix1, iy0 - oy0), (ix1, iy0)),
            ((ox0, iy1, ix0 - ox0, oy1 - iy1), (ix0, iy1)),
            ((ix1, iy1, ox1 - ix1, oy1 - iy1), (ix1, iy1)),
        )
        for corner_rect, centre in corners:
            radius = max(corner_rect[2], corner_rect[3])
            if radius <= 0:
                continue
            gradient = QRadialGradient(QPointF(*centre), radius)
            self._ramp(gradient, color, rising=False)
            self.painter.fillRect(QRectF(*corner_rect), QBrush(gradient))
