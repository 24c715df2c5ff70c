from PySide6.QtWidgets import QApplication
from PySide6.QtCore import QCoreApplication, QSettings

import os
import sys
from typing import Optional

ORG_ID = "artinsitu"
APP_ID = "in-situ-preview"
ORG_DOMAIN = "artinsitu.local"

VISIBLE_APP_NAME = "In Situ Preview"


def create_app(argv: Optional[list[str]] = None) -> QApplication:
    """Create and configure the QApplication instance (or return the running one)."""
    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")

    QCoreApplication.setOrganizationName(ORG_ID)
    QCoreApplication.setOrganizationDomain(ORG_DOMAIN)
    QCoreApplication.setApplicationName(APP_ID)
    QSettings.setDefaultFormat(QSettings.Format.IniFormat)

    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv if argv is None else argv)

    # Set the visible, translatable display name
    visible_name = QCoreApplication.translate("App", VISIBLE_APP_NAME)
    app.setApplicationDisplayName(visible_name)

    return app
