"""
Preview Window
==============
Minimal host for the canvas: a black, full-window frame with keyboard
toggles.

Why is this file needed?
------------------------
1. Ownership: The canvas never decides whether debug info or the chair is
   shown. The host owns those flags and forwards them as scene properties.
2. Persistence: Window geometry survives restarts through QSettings.

Keys:
    D: toggle the debug overlay.
    C: toggle the chair.
    Esc: close the window.
"""
import logging
from typing import Optional

from PySide6.QtCore import QSettings, Qt
from PySide6.QtWidgets import QMainWindow, QWidget

from artinsitu.config import SETTINGS_WINDOW_GEOMETRY
from artinsitu.model.props import SceneProps
from artinsitu.view.canvas import InSituCanvas

logger = logging.getLogger(__name__)


class InSituWindow(QMainWindow):
    def __init__(self, props: Optional[SceneProps] = None, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("In situ art preview")
        self.setStyleSheet("QMainWindow { background: black; }")

        self.canvas = InSituCanvas(props, parent=self)
        self.setCentralWidget(self.canvas)

        self._restore_geometry()

    def keyPressEvent(self, event) -> None:
        key = event.key()
        if key == Qt.Key_D:
            show = not self.canvas.props.show_debug
            logger.debug(f"Debug overlay {'on' if show else 'off'}.")
            self.canvas.update_props(show_debug=show)
        elif key == Qt.Key_C:
            self.canvas.update_props(show_chair=not self.canvas.props.show_chair)
        elif key == Qt.Key_Escape:
            self.close()
        else:
            super().keyPressEvent(event)

    def closeEvent(self, event) -> None:
        QSettings().setValue(SETTINGS_WINDOW_GEOMETRY, self.saveGeometry())
        super().closeEvent(event)

    def _restore_geometry(self) -> None:
        geometry = QSettings().value(SETTINGS_WINDOW_GEOMETRY)
        if geometry is None or not self.restoreGeometry(geometry):
            self.resize(1400, 900)
