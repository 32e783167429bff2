# -*- coding: utf-8 -*-
"""Main window + menus."""

from __future__ import annotations

import logging
import os
from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import QFileDialog, QMainWindow, QMessageBox, QScrollArea, QStatusBar

from ..core.editor import EditingModeController
from ..core.errors import PatternFormatError
from ..core.serializer import export_filename
from ..core.settings import EditorSettings
from .canvas import PatternCanvas
from .settings_dialog import SettingsDialog

logger = logging.getLogger(__name__)

JSON_FILTER = "Pattern JSON (*.json);;All Files (*)"


class MainWindow(QMainWindow):
    def __init__(self, settings: Optional[EditorSettings] = None):
        super().__init__()
        self.setWindowTitle("Crochet Pattern Designer")
        self.ctrl = EditingModeController(settings=settings, on_export=self.file_export)
        self.canvas = PatternCanvas(self.ctrl)
        scroll = QScrollArea(self)
        scroll.setWidget(self.canvas)
        scroll.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setCentralWidget(scroll)
        self.setStatusBar(QStatusBar())
        self.last_dir: str = ""
        self._build_menus()
        self.canvas.frameAdvanced.connect(self.update_status)
        self.update_status()
        self.canvas.setFocus()

    def _build_menus(self):
        mb = self.menuBar()
        menu_file = mb.addMenu("&File")
        self.act_file_new = QAction("New Pattern", self)
        self.act_file_new.setShortcut(QKeySequence.StandardKey.New)
        self.act_file_new.triggered.connect(self.file_new)
        self.act_file_open = QAction("Import Pattern...", self)
        self.act_file_open.setShortcut(QKeySequence.StandardKey.Open)
        self.act_file_open.triggered.connect(self.file_import)
        self.act_file_export = QAction("Export Pattern...", self)
        self.act_file_export.setShortcut(QKeySequence.StandardKey.Save)
        self.act_file_export.triggered.connect(self.file_export)
        self.act_settings = QAction("Settings...", self)
        self.act_settings.triggered.connect(self.open_settings)
        self.act_file_exit = QAction("Exit", self)
        self.act_file_exit.triggered.connect(self.close)
        for act in (self.act_file_new, self.act_file_open, self.act_file_export):
            menu_file.addAction(act)
        menu_file.addSeparator()
        menu_file.addAction(self.act_settings)
        menu_file.addSeparator()
        menu_file.addAction(self.act_file_exit)

        menu_view = mb.addMenu("&View")
        self.act_detailed = QAction("Crochet Path", self, checkable=True)
        self.act_detailed.triggered.connect(lambda c: self._set_detailed_view(c))
        menu_view.addAction(self.act_detailed)

    def _set_detailed_view(self, checked: bool):
        if self.ctrl.state.detailed_view != checked:
            self.ctrl.toggle_detailed_view()

    def update_status(self):
        self.statusBar().showMessage(self.ctrl.status_text())
        if self.act_detailed.isChecked() != self.ctrl.state.detailed_view:
            self.act_detailed.setChecked(self.ctrl.state.detailed_view)

    def report_error(self, title: str, detail: str) -> None:
        QMessageBox.critical(self, title, detail)

    def open_settings(self):
        dlg = SettingsDialog(self.ctrl, self)
        if dlg.exec():
            self.ctrl.settings.hover_radius = dlg.hover_radius()
            self.ctrl.settings.anchor_dot_diameter = dlg.anchor_dot_diameter()
            self.ctrl.settings.inter_stitch_space = dlg.inter_stitch_space()
            self.canvas.apply_settings()

    def file_new(self):
        if self.ctrl.dragging is not None:
            return
        self.ctrl.new_pattern()
        self.canvas.apply_settings()

    def file_import(self):
        path, _ = QFileDialog.getOpenFileName(self, "Import Pattern", self.last_dir, JSON_FILTER)
        if not path:
            return
        self.last_dir = os.path.dirname(path)
        try:
            with open(path, "rb") as f:
                text = f.read()
        except OSError as e:
            logger.warning("Could not read %s: %s", path, e)
            self.report_error("Import failed", str(e))
            return
        try:
            self.ctrl.import_json(text)
        except PatternFormatError as e:
            logger.warning("Rejected pattern %s: %s", path, e)
            self.report_error("Import failed", f"Could not parse pattern:\n{e}")
            return
        self.canvas.apply_settings()

    def file_export(self):
        text = self.ctrl.export_json()
        default = os.path.join(self.last_dir, export_filename())
        path, _ = QFileDialog.getSaveFileName(self, "Export Pattern", default, JSON_FILTER)
        if not path:
            return
        self.last_dir = os.path.dirname(path)
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(text)
        except OSError as e:
            logger.warning("Could not write %s: %s", path, e)
            self.report_error("Export failed", str(e))
            return
        logger.info("Wrote pattern to %s", path)
