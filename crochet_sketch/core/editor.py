# -*- coding: utf-8 -*-
"""Editing-mode state machine and pointer/key gesture handling.

The controller is the only place that mutates the stitch graph. The canvas
forwards raw input here:

- ``tick(x, y)`` once per frame with the pointer position,
- ``press`` / ``release`` for the primary pointer button,
- ``key`` / ``nudge`` for keyboard commands.

Everything the renderer needs (hover, selection, ghost preview, anchors) is
read back from the controller.
"""

from __future__ import annotations

import logging
from collections import ChainMap
from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping, Optional, Set, Tuple, Union

from .anchors import anchor_for_mode
from .geometry import Point, dist, in_box
from .graph import StitchGraph
from .serializer import json_to_stitches, stitches_to_json
from .settings import EditorSettings
from .stitches import EditingMode, Stitch, StitchType

logger = logging.getLogger(__name__)

# Ids of preview-only stitches; never present in a graph.
GHOST_ID = -1
PLACEHOLDER_ID = -2

MODE_KEYS = {
    "a": EditingMode.Adding,
    "m": EditingMode.Moving,
    "d": EditingMode.Deleting,
    "i": EditingMode.Inserting,
    "v": EditingMode.Viewing,
    "b": EditingMode.Rebasing,
}

STITCH_KEYS = {
    "1": StitchType.Chain,
    "2": StitchType.Slip,
    "3": StitchType.SingleCrochet,
    "4": StitchType.HalfDoubleCrochet,
    "5": StitchType.DoubleCrochet,
    "6": StitchType.TrebleCrochet,
    "7": StitchType.DoubleTrebleCrochet,
}


@dataclass
class DragState:
    sid: int
    start: Point


@dataclass
class SelectionBox:
    start: Point
    end: Point


@dataclass
class EditorState:
    mode: EditingMode = EditingMode.Adding
    stitch_type: StitchType = StitchType.Chain
    hovering: Optional[int] = None
    dragging: Optional[DragState] = None
    selection: Set[int] = field(default_factory=set)
    selection_box: Optional[SelectionBox] = None
    detailed_view: bool = False
    pointer: Point = (0.0, 0.0)


class EditingModeController:
    def __init__(
        self,
        graph: Optional[StitchGraph] = None,
        settings: Optional[EditorSettings] = None,
        on_export: Optional[Callable[[], None]] = None,
    ):
        self.settings = settings or EditorSettings()
        self.graph = graph or StitchGraph.new(*self.settings.canvas_center)
        self.state = EditorState()
        self._on_export = on_export

    # ---- mode / type ----

    @property
    def mode(self) -> EditingMode:
        return self.state.mode

    @property
    def dragging(self) -> Optional[DragState]:
        return self.state.dragging

    def set_mode(self, mode: EditingMode) -> None:
        self.state.selection.clear()
        if self.state.mode == mode:
            self.state.mode = EditingMode.Viewing
        else:
            self.state.mode = mode

    def set_stitch_type(self, stitch_type: StitchType) -> None:
        self.state.stitch_type = StitchType(stitch_type)

    def toggle_detailed_view(self) -> None:
        self.state.detailed_view = not self.state.detailed_view

    def mode_text(self) -> str:
        return self.state.mode.value

    def status_text(self) -> str:
        if self.state.mode == EditingMode.Adding:
            return f"{self.mode_text()} | {self.state.stitch_type.label}"
        if self.state.mode == EditingMode.Moving and self.state.selection:
            return f"{self.mode_text()} | {len(self.state.selection)} selected"
        return self.mode_text()

    # ---- queries ----

    def can_drag(self, sid: int, mode: Optional[EditingMode] = None) -> bool:
        m = self.state.mode if mode is None else mode
        graph = self.graph
        if m in (EditingMode.Moving, EditingMode.Inserting):
            return True
        if m == EditingMode.Deleting:
            return not graph.is_sentinel(sid)
        if m == EditingMode.Viewing:
            return False
        if m == EditingMode.Rebasing:
            if self.state.dragging is not None:
                return sid != self.state.dragging.sid
            s = graph.get(sid)
            return s is not None and s.type.is_post
        if m == EditingMode.Adding:
            if self.state.stitch_type == StitchType.Chain:
                return sid == graph.next_parent
            return sid != graph.next_parent
        raise ValueError(f"Unknown editing mode: {m!r}")

    def anchor(self, sid: int, stitches: Optional[Mapping[int, Stitch]] = None) -> Point:
        stitches = self.graph.stitches if stitches is None else stitches
        return anchor_for_mode(
            stitches,
            stitches[sid],
            self.state.mode,
            self.state.dragging is not None,
            self.graph.next_parent,
        )

    def update_hover(self, x: float, y: float) -> Optional[int]:
        """Closest draggable anchor within the hover radius; first wins ties."""
        best: Optional[int] = None
        best_d = float("inf")
        for s in self.graph:
            if not self.can_drag(s.sid):
                continue
            ax, ay = self.anchor(s.sid)
            d = dist(x, y, ax, ay)
            if d < self.settings.hover_radius and d < best_d:
                best, best_d = s.sid, d
        self.state.hovering = best
        return best

    def ghost(self) -> Optional[Tuple[Mapping[int, Stitch], Stitch]]:
        """Preview stitch for the active drag, layered over the graph.

        Returns ``(stitches, ghost)`` where ``stitches`` resolves the ghost's
        edges, or None when there is nothing to preview.
        """
        drag = self.state.dragging
        if drag is None or drag.sid not in self.graph:
            return None
        px, py = self.state.pointer
        if self.state.mode == EditingMode.Adding:
            ghost = Stitch(GHOST_ID, px, py, self.state.stitch_type, self.graph.next_parent, drag.sid)
            return ChainMap({GHOST_ID: ghost}, self.graph.stitches), ghost
        if self.state.mode == EditingMode.Rebasing:
            dragged = self.graph.stitches[drag.sid]
            overlay: Dict[int, Stitch] = {}
            base = self.state.hovering
            if base is None:
                overlay[PLACEHOLDER_ID] = Stitch(PLACEHOLDER_ID, px, py, StitchType.Slip)
                base = PLACEHOLDER_ID
            ghost = Stitch(GHOST_ID, dragged.x, dragged.y, dragged.type, dragged.parent, base)
            overlay[GHOST_ID] = ghost
            return ChainMap(overlay, self.graph.stitches), ghost
        return None

    # ---- per-frame ----

    def tick(self, x: float, y: float) -> None:
        self.state.pointer = (float(x), float(y))
        self.update_hover(x, y)
        drag = self.state.dragging
        if drag is not None and self.state.mode == EditingMode.Moving:
            dx, dy = x - drag.start[0], y - drag.start[1]
            if dx or dy:
                self.graph.move_by(self.state.selection, dx, dy)
            drag.start = (float(x), float(y))
        box = self.state.selection_box
        if box is not None:
            box.end = (float(x), float(y))
            self.state.selection = {
                s.sid for s in self.graph if in_box(self.anchor(s.sid), box.start, box.end)
            }

    # ---- pointer ----

    def press(self, x: float, y: float, toggle: bool = False) -> None:
        self.state.pointer = (float(x), float(y))
        hovered = self.update_hover(x, y)
        if hovered is None:
            if self.state.mode == EditingMode.Moving:
                self.state.selection_box = SelectionBox((float(x), float(y)), (float(x), float(y)))
                self.state.selection.clear()
            return
        if not self.can_drag(hovered):
            return
        mode = self.state.mode
        if mode == EditingMode.Moving:
            if toggle:
                if hovered in self.state.selection:
                    self.state.selection.discard(hovered)
                else:
                    self.state.selection.add(hovered)
            else:
                if hovered not in self.state.selection:
                    self.state.selection.clear()
                self.state.selection.add(hovered)
                self._begin_drag(hovered, x, y)
        elif mode in (EditingMode.Adding, EditingMode.Rebasing):
            self._begin_drag(hovered, x, y)
        elif mode == EditingMode.Deleting:
            if self.graph.delete_stitch(hovered):
                self.state.selection.discard(hovered)
                self.state.hovering = None
        elif mode == EditingMode.Inserting:
            self.graph.set_next_parent(hovered)
            self.state.mode = EditingMode.Adding

    def release(self, x: float, y: float) -> None:
        self.state.pointer = (float(x), float(y))
        self.state.selection_box = None
        drag = self.state.dragging
        if drag is None:
            return
        self.update_hover(x, y)
        mode = self.state.mode
        if mode == EditingMode.Adding:
            self.graph.add_stitch(x, y, self.state.stitch_type, base=drag.sid)
        elif mode == EditingMode.Rebasing:
            if self.state.hovering is not None:
                self.graph.rebase(drag.sid, self.state.hovering)
        self.state.dragging = None

    def _begin_drag(self, sid: int, x: float, y: float) -> None:
        self.state.dragging = DragState(sid, (float(x), float(y)))

    # ---- keyboard ----

    def key(self, char: str) -> bool:
        """Handle a single-character command. Returns True when consumed."""
        if self.state.dragging is not None:
            return False
        if self.state.mode == EditingMode.Moving and char in ("v", "h"):
            if char == "v" and not self.state.selection:
                self.set_mode(EditingMode.Viewing)
                return True
            self.graph.align(self.state.selection, "vertical" if char == "v" else "horizontal")
            return True
        if char in MODE_KEYS:
            self.set_mode(MODE_KEYS[char])
            return True
        if char in STITCH_KEYS:
            self.set_stitch_type(STITCH_KEYS[char])
            return True
        if char == " ":
            self.toggle_detailed_view()
            return True
        if char == "e":
            if self._on_export is not None:
                self._on_export()
            return True
        return False

    def nudge(self, dx: float, dy: float, shift: bool = False) -> bool:
        """Arrow-key move of the group selection (Moving mode only)."""
        if self.state.dragging is not None or self.state.mode != EditingMode.Moving:
            return False
        step = 10.0 if shift else 1.0
        self.graph.move_by(self.state.selection, dx * step, dy * step)
        return True

    # ---- whole-graph ----

    def install_graph(self, graph: StitchGraph) -> None:
        """Swap in a new graph, discarding any gesture tied to the old one."""
        self.state.dragging = None
        self.state.selection_box = None
        self.state.hovering = None
        self.state.selection.clear()
        self.graph = graph

    def new_pattern(self) -> None:
        self.install_graph(StitchGraph.new(*self.settings.canvas_center))
        logger.info("Started a new pattern")

    def export_json(self) -> str:
        text = stitches_to_json(self.graph)
        logger.info("Exported %d stitches", len(self.graph))
        return text

    def import_json(self, text: Union[str, bytes]) -> None:
        """Parse and install a pattern; the current graph survives any failure."""
        graph = json_to_stitches(text)
        self.install_graph(graph)
        logger.info("Imported %d stitches", len(graph))
