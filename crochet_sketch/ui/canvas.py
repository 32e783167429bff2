# -*- coding: utf-8 -*-
"""Pattern canvas: frame timer, pointer/key forwarding and painting."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Set

from PyQt6.QtCore import Qt, QPointF, QRectF, QTimer, pyqtSignal
from PyQt6.QtGui import QBrush, QPainter, QPen
from PyQt6.QtWidgets import QWidget

from ..core.anchors import head_anchor
from ..core.errors import StitchIntegrityError
from ..core.geometry import bounds
from ..core.stitches import EditingMode, StitchType
from ..utils.constants import (
    ANCHOR_HOVER,
    ANCHOR_OUTLINE,
    BACKGROUND,
    CROCHET_PATH,
    GHOST,
    HIGHLIGHT,
    SELECTED,
    SELECTION_BOX,
    STITCH,
    STITCH_PEN_WIDTH,
)
from ..utils.qt_safe import safe_event
from .render import draw_stitch

if TYPE_CHECKING:
    from ..core.editor import EditingModeController

logger = logging.getLogger(__name__)

ARROW_KEYS = {
    Qt.Key.Key_Left: (-1, 0),
    Qt.Key.Key_Right: (1, 0),
    Qt.Key.Key_Up: (0, -1),
    Qt.Key.Key_Down: (0, 1),
}


class PatternCanvas(QWidget):
    frameAdvanced = pyqtSignal()

    def __init__(self, ctrl: "EditingModeController", parent=None):
        super().__init__(parent)
        self.ctrl = ctrl
        self._pointer = QPointF(0, 0)
        self._warned: Set[int] = set()
        self.apply_settings()
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self._timer = QTimer(self)
        self._timer.timeout.connect(self._frame)
        self._timer.start(self.ctrl.settings.frame_interval_ms)

    def apply_settings(self):
        s = self.ctrl.settings
        self.setFixedSize(s.canvas_width, s.canvas_height)
        self._warned.clear()

    def _frame(self):
        self.ctrl.tick(self._pointer.x(), self._pointer.y())
        self.update()
        self.frameAdvanced.emit()

    # ---- input ----

    @safe_event
    def mouseMoveEvent(self, e):
        self._pointer = e.position()
        e.accept()

    @safe_event
    def mousePressEvent(self, e):
        if e.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(e)
            return
        self._pointer = e.position()
        toggle = bool(e.modifiers() & Qt.KeyboardModifier.ShiftModifier)
        self.ctrl.press(self._pointer.x(), self._pointer.y(), toggle=toggle)
        self.update()
        e.accept()

    @safe_event
    def mouseReleaseEvent(self, e):
        if e.button() != Qt.MouseButton.LeftButton:
            super().mouseReleaseEvent(e)
            return
        self._pointer = e.position()
        self.ctrl.release(self._pointer.x(), self._pointer.y())
        self.update()
        e.accept()

    @safe_event
    def keyPressEvent(self, e):
        if e.key() in ARROW_KEYS:
            dx, dy = ARROW_KEYS[e.key()]
            shift = bool(e.modifiers() & Qt.KeyboardModifier.ShiftModifier)
            if self.ctrl.nudge(dx, dy, shift=shift):
                e.accept(); return
        text = e.text()
        if len(text) == 1 and self.ctrl.key(text.lower()):
            e.accept(); return
        super().keyPressEvent(e)

    # ---- painting ----

    def _draw(self, p: QPainter, stitches, stitch):
        try:
            draw_stitch(p, stitches, stitch, self.ctrl.settings)
        except StitchIntegrityError as err:
            if stitch.sid not in self._warned:
                self._warned.add(stitch.sid)
                logger.warning("Skipping stitch: %s", err)

    @safe_event
    def paintEvent(self, e):
        ctrl = self.ctrl
        st = ctrl.state
        graph = ctrl.graph
        settings = ctrl.settings
        p = QPainter(self)
        try:
            p.setRenderHint(QPainter.RenderHint.Antialiasing)
            p.fillRect(self.rect(), BACKGROUND)

            viewing = st.mode == EditingMode.Viewing
            for s in graph:
                highlight = s.sid == graph.next_parent and not viewing
                color = HIGHLIGHT if highlight else STITCH
                p.setPen(QPen(color, STITCH_PEN_WIDTH))
                p.setBrush(QBrush(color) if s.type == StitchType.Slip else Qt.BrushStyle.NoBrush)
                self._draw(p, graph.stitches, s)

            r = settings.anchor_dot_diameter / 2.0
            for s in graph:
                if not ctrl.can_drag(s.sid):
                    continue
                p.setPen(Qt.PenStyle.NoPen)
                p.setBrush(Qt.BrushStyle.NoBrush)
                if st.mode == EditingMode.Moving and s.sid in st.selection:
                    p.setBrush(QBrush(SELECTED))
                elif s.sid == st.hovering:
                    p.setBrush(QBrush(ANCHOR_HOVER))
                else:
                    p.setPen(QPen(ANCHOR_OUTLINE, STITCH_PEN_WIDTH))
                ax, ay = ctrl.anchor(s.sid)
                p.drawEllipse(QPointF(ax, ay), r, r)

            preview = ctrl.ghost()
            if preview is not None:
                stitches, ghost = preview
                p.setPen(QPen(GHOST, STITCH_PEN_WIDTH))
                p.setBrush(Qt.BrushStyle.NoBrush)
                self._draw(p, stitches, ghost)

            if st.detailed_view:
                p.setPen(QPen(CROCHET_PATH, STITCH_PEN_WIDTH))
                for s in graph:
                    parent = graph.get(s.parent)
                    if parent is not None:
                        p.drawLine(QPointF(*head_anchor(s)), QPointF(*head_anchor(parent)))

            p.setBrush(Qt.BrushStyle.NoBrush)
            if st.mode == EditingMode.Moving and st.selection and st.selection_box is None:
                xmin, ymin, xmax, ymax = bounds(
                    ctrl.anchor(sid) for sid in st.selection if sid in graph
                )
                if xmin <= xmax:
                    p.setPen(QPen(SELECTED, STITCH_PEN_WIDTH))
                    p.drawRect(QRectF(QPointF(xmin - 2 * r, ymin - 2 * r), QPointF(xmax + 2 * r, ymax + 2 * r)))

            box = st.selection_box
            if box is not None:
                p.setPen(QPen(SELECTION_BOX, STITCH_PEN_WIDTH))
                p.drawRect(QRectF(QPointF(*box.start), QPointF(*box.end)).normalized())
        finally:
            p.end()
