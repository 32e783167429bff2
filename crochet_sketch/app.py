# -*- coding: utf-8 -*-
"""Application entry point."""

from __future__ import annotations

import logging
import os
import sys
from PyQt6.QtWidgets import QApplication

from .core.settings import EditorSettings
from .ui.main_window import MainWindow

LOG_LEVEL_ENV = "CROCHET_SKETCH_LOG_LEVEL"


def main():
    logging.basicConfig(
        level=getattr(logging, os.environ.get(LOG_LEVEL_ENV, "INFO").upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = QApplication(sys.argv)
    w = MainWindow(EditorSettings.from_env())
    w.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
