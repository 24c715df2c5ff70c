"""
Asset Loader
============
Resolves an image source (file path, file://, http(s)://, qrc: or data: URL)
to a decoded QImage, asynchronously.

Why is this file needed?
------------------------
1. Responsiveness: Fetching and decoding never blocks the render loop. The
   first frame is painted with placeholders and repainted when images arrive.
2. Failure policy: Network, file and decode errors are logged and reported
   as `None`. The compositor's placeholder is the only recovery path, so
   nothing is raised to the caller.

Classes:
    ImageRequest: One in-flight load; emits `finished(QImage | None)` once.
    AssetLoader: Starts loads through a shared QNetworkAccessManager.
"""
from __future__ import annotations

import logging
import os
from typing import Optional

from PySide6.QtCore import QObject, QTimer, QUrl, Signal
from PySide6.QtGui import QImage
from PySide6.QtNetwork import QNetworkAccessManager, QNetworkReply, QNetworkRequest

logger = logging.getLogger(__name__)

_URL_SCHEMES = {"http", "https", "file", "qrc", "data"}


def source_to_url(source: str) -> Optional[QUrl]:
    """
    Map an image source to a QUrl, or None if it cannot be fetched.

    Bare paths (including Windows drive paths) are treated as local files.
    """
    if not source:
        return None
    url = QUrl(source)
    scheme = url.scheme().lower()
    if scheme in _URL_SCHEMES:
        return url
    if scheme and len(scheme) > 1:
        return None
    return QUrl.fromLocalFile(os.path.abspath(source))


def decode_image(data: bytes) -> Optional[QImage]:
    """Decode encoded image bytes. None if Qt cannot read them."""
    image = QImage.fromData(data)
    if image.isNull():
        return None
    return image.convertToFormat(QImage.Format_ARGB32_Premultiplied)


class ImageRequest(QObject):
    """A single image load. `finished` fires exactly once."""
    finished = Signal(object)

    def __init__(self, source: str, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.source = source
        self.image: Optional[QImage] = None
        self.done = False

    def _resolve(self, image: Optional[QImage]) -> None:
        if self.done:
            return
        self.done = True
        self.image = image
        self.finished.emit(image)
        self.deleteLater()


class AssetLoader(QObject):
    """Fire-and-forget image loading. No timeouts, no cancellation."""

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._manager = QNetworkAccessManager(self)

    def load(self, source: str) -> ImageRequest:
        """
        Start loading `source`.

        Args:
            source: Local path or URL of the image.

        Returns:
            An ImageRequest whose `finished` signal carries the QImage or None.
            It always fires after this call returns, never synchronously.
        """
        request = ImageRequest(source, self)
        url = source_to_url(source)
        if url is None:
            logger.warning(f"Unsupported image source '{source}'.")
            QTimer.singleShot(0, lambda: request._resolve(None))
            return request

        reply = self._manager.get(QNetworkRequest(url))
        reply.finished.connect(lambda: self._on_reply_finished(request, reply))
        return request

    def _on_reply_finished(self, request: ImageRequest, reply: QNetworkReply) -> None:
        try:
            if reply.error() != QNetworkReply.NetworkError.NoError:
                logger.warning(f"Failed to load image '{request.source}': {reply.errorString()}")
                request._resolve(None)
                return
            image = decode_image(reply.readAll().data())
            if image is None:
                logger.warning(f"Could not decode image '{request.source}'.")
            else:
                logger.info(f"Loaded image '{request.source}' ({image.width()}x{image.height()}).")
            request._resolve(image)
        finally:
            reply.deleteLater()
