# -*- coding: utf-8 -*-
"""Anchor points of stitches.

Anchors are the 2D points used to draw connectors and to hit-test stitches.
They are derived from a stitch's type and its edges, not only from its stored
position:

- head:   the stored position, for every type.
- middle: halfway along the stitch's body. Chains run from their parent's
          head, post stitches from their base's attach point.
- attach: where another stitch is worked into this one. The middle of a
          chain, the head of anything else.

All functions take a ``Mapping[int, Stitch]`` so previews can layer a ghost
stitch over the graph arena with ``collections.ChainMap``. Recursion depth is
bounded: a chain's middle only reads its parent's head.
"""

from __future__ import annotations

from typing import Mapping, NamedTuple, Optional

from .errors import StitchIntegrityError
from .geometry import Point, midpoint
from .stitches import EditingMode, Stitch, StitchType


def _ref(stitches: Mapping[int, Stitch], owner: Stitch, sid: int, edge: str) -> Stitch:
    try:
        return stitches[sid]
    except KeyError:
        raise StitchIntegrityError(owner.sid, f"{edge} {sid} is not in the graph") from None


def head_anchor(stitch: Stitch) -> Point:
    return stitch.pos


def middle_anchor(stitches: Mapping[int, Stitch], stitch: Stitch) -> Point:
    if stitch.type == StitchType.Slip:
        return head_anchor(stitch)
    if stitch.type == StitchType.Chain:
        if stitch.parent is None:
            return head_anchor(stitch)
        parent = _ref(stitches, stitch, stitch.parent, "parent")
        return midpoint(head_anchor(parent), stitch.pos)
    if stitch.base is None:
        return head_anchor(stitch)
    base = _ref(stitches, stitch, stitch.base, "base")
    return midpoint(attach_anchor(stitches, base), stitch.pos)


def attach_anchor(stitches: Mapping[int, Stitch], stitch: Stitch) -> Point:
    if stitch.type == StitchType.Chain:
        return middle_anchor(stitches, stitch)
    return head_anchor(stitch)


def anchor_for_mode(
    stitches: Mapping[int, Stitch],
    stitch: Stitch,
    mode: EditingMode,
    dragging: bool,
    next_parent: Optional[int],
) -> Point:
    if mode in (EditingMode.Moving, EditingMode.Viewing, EditingMode.Inserting):
        return head_anchor(stitch)
    if mode == EditingMode.Deleting:
        return middle_anchor(stitches, stitch)
    if mode == EditingMode.Rebasing:
        return attach_anchor(stitches, stitch) if dragging else middle_anchor(stitches, stitch)
    if mode == EditingMode.Adding:
        if stitch.sid == next_parent:
            return head_anchor(stitch)
        return attach_anchor(stitches, stitch)
    raise ValueError(f"Unknown editing mode: {mode!r}")


class StitchSegments(NamedTuple):
    """The points a stitch symbol is drawn between."""

    head: Point
    parent_head: Optional[Point]
    base_attach: Optional[Point]


def stitch_segments(stitches: Mapping[int, Stitch], stitch: Stitch) -> StitchSegments:
    """Resolve the drawing points of a stitch.

    Raises StitchIntegrityError when a reference the type needs is missing:
    chains need a parent, post stitches a base, and hdc or longer a parent too.
    """
    t = stitch.type
    head = head_anchor(stitch)
    if t == StitchType.Slip:
        return StitchSegments(head, None, None)
    if t == StitchType.Chain:
        if stitch.parent is None:
            raise StitchIntegrityError(stitch.sid, "chain stitch has no parent")
        parent = _ref(stitches, stitch, stitch.parent, "parent")
        return StitchSegments(head, head_anchor(parent), None)
    if stitch.base is None:
        raise StitchIntegrityError(stitch.sid, f"{t.name} has no base")
    base_attach = attach_anchor(stitches, _ref(stitches, stitch, stitch.base, "base"))
    if t == StitchType.SingleCrochet:
        return StitchSegments(head, None, base_attach)
    if stitch.parent is None:
        raise StitchIntegrityError(stitch.sid, f"{t.name} has no parent")
    parent = _ref(stitches, stitch, stitch.parent, "parent")
    return StitchSegments(head, head_anchor(parent), base_attach)
