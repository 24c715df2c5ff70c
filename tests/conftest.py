import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtCore import QEventLoop, QTimer  # noqa: E402
from PySide6.QtWidgets import QApplication  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


def wait_signal(signal, timeout_ms: int = 5000):
    """Spin an event loop until `signal` fires. Returns its args, or None on timeout."""
    loop = QEventLoop()
    received = []

    def _handler(*args):
        received.append(args)
        loop.quit()

    signal.connect(_handler)
    QTimer.singleShot(timeout_ms, loop.quit)
    loop.exec()
    try:
        signal.disconnect(_handler)
    except RuntimeError:
        # sender already deleted
        pass
    return received[0] if received else None


def process_events(ms: int = 50) -> None:
    """Run the event loop for `ms` milliseconds."""
    loop = QEventLoop()
    QTimer.singleShot(ms, loop.quit)
    loop.exec()
