# -*- coding: utf-8 -*-
"""Stitch symbols drawn with QPainter."""

from __future__ import annotations

import math
from typing import Mapping

from PyQt6.QtCore import QLineF, QPointF
from PyQt6.QtGui import QPainter

from ..core.anchors import middle_anchor, stitch_segments
from ..core.geometry import dist, heading
from ..core.settings import EditorSettings
from ..core.stitches import STITCH_HASHES, Stitch, StitchType
from ..utils.constants import CROSSBAR_HALF, HASH_HALF


def _deg(rad: float) -> float:
    return math.degrees(rad)


def draw_slip(p: QPainter, stitch: Stitch, settings: EditorSettings) -> None:
    r = settings.slip_stitch_diameter / 2.0
    p.drawEllipse(QPointF(stitch.x, stitch.y), r, r)


def draw_chain(p: QPainter, stitches: Mapping[int, Stitch], stitch: Stitch, settings: EditorSettings) -> None:
    seg = stitch_segments(stitches, stitch)
    d = dist(*seg.parent_head, *seg.head)
    ax, ay = middle_anchor(stitches, stitch)
    p.save()
    p.translate(ax, ay)
    p.rotate(_deg(heading(seg.parent_head, seg.head)))
    p.drawEllipse(QPointF(0, 0), (d - settings.inter_stitch_space) / 2.0, (8 + d * 0.1) / 2.0)
    p.restore()


def draw_single_crochet(p: QPainter, stitches: Mapping[int, Stitch], stitch: Stitch, settings: EditorSettings) -> None:
    seg = stitch_segments(stitches, stitch)
    bx, by = seg.base_attach
    length = dist(bx, by, *seg.head) - settings.inter_stitch_space
    p.save()
    p.translate(bx, by)
    p.rotate(_deg(heading(seg.base_attach, seg.head)))
    p.translate(settings.inter_stitch_space / 2.0, 0)
    p.drawLine(QLineF(0, 0, length, 0))
    p.drawLine(QLineF(length / 2.0, CROSSBAR_HALF, length / 2.0, -CROSSBAR_HALF))
    p.restore()


def draw_long_stitch(p: QPainter, stitches: Mapping[int, Stitch], stitch: Stitch, settings: EditorSettings) -> None:
    """Spine from the base with diagonal hashes, head bar in line with the parent."""
    seg = stitch_segments(stitches, stitch)
    x, y = seg.head
    length = dist(*seg.base_attach, x, y) - settings.inter_stitch_space
    to_base = heading(seg.base_attach, seg.head)
    p.save()
    p.translate(x, y)
    p.rotate(_deg(to_base))
    p.translate(-settings.inter_stitch_space / 2.0, 0)
    p.drawLine(QLineF(0, 0, -length, 0))
    for i in range(STITCH_HASHES[stitch.type]):
        c = -length * (2 + i) / 12.0
        p.drawLine(QLineF(c + HASH_HALF, -HASH_HALF, c - HASH_HALF, HASH_HALF))
    p.rotate(_deg(heading(seg.parent_head, seg.head) - to_base))
    p.drawLine(QLineF(CROSSBAR_HALF, 0, -CROSSBAR_HALF, 0))
    p.restore()


def draw_stitch(p: QPainter, stitches: Mapping[int, Stitch], stitch: Stitch, settings: EditorSettings) -> None:
    """Draw one stitch. Raises StitchIntegrityError for structurally broken stitches."""
    if stitch.type == StitchType.Slip:
        draw_slip(p, stitch, settings)
    elif stitch.type == StitchType.Chain:
        draw_chain(p, stitches, stitch, settings)
    elif stitch.type == StitchType.SingleCrochet:
        draw_single_crochet(p, stitches, stitch, settings)
    else:
        draw_long_stitch(p, stitches, stitch, settings)
