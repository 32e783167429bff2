# -*- coding: utf-8 -*-
"""Settings dialog for hit-testing and symbol sizes."""

from __future__ import annotations

from PyQt6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QDoubleSpinBox,
)


class SettingsDialog(QDialog):
    def __init__(self, ctrl, parent=None):
        super().__init__(parent)
        self.ctrl = ctrl
        settings = self.ctrl.settings
        self.setWindowTitle("Settings")

        layout = QFormLayout(self)
        self.spin_hover = QDoubleSpinBox(self)
        self.spin_hover.setRange(2.0, 100.0)
        self.spin_hover.setSingleStep(1.0)
        self.spin_hover.setValue(float(settings.hover_radius))
        layout.addRow("Hover radius (px)", self.spin_hover)

        self.spin_anchor = QDoubleSpinBox(self)
        self.spin_anchor.setRange(2.0, 40.0)
        self.spin_anchor.setSingleStep(1.0)
        self.spin_anchor.setValue(float(settings.anchor_dot_diameter))
        layout.addRow("Anchor dot size (px)", self.spin_anchor)

        self.spin_spacing = QDoubleSpinBox(self)
        self.spin_spacing.setRange(0.0, 40.0)
        self.spin_spacing.setSingleStep(1.0)
        self.spin_spacing.setValue(float(settings.inter_stitch_space))
        layout.addRow("Stitch spacing (px)", self.spin_spacing)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addRow(buttons)

    def hover_radius(self) -> float:
        return float(self.spin_hover.value())

    def anchor_dot_diameter(self) -> float:
        return float(self.spin_anchor.value())

    def inter_stitch_space(self) -> float:
        return float(self.spin_spacing.value())
