# -*- coding: utf-8 -*-
"""Stitch model: stitch types, editing modes and the stitch node."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Tuple


class StitchType(IntEnum):
    """Stitch kinds. The integer values are the on-disk ordinals."""

    Chain = 0
    SingleCrochet = 1
    HalfDoubleCrochet = 2
    DoubleCrochet = 3
    TrebleCrochet = 4
    DoubleTrebleCrochet = 5
    Slip = 6

    @property
    def label(self) -> str:
        return STITCH_LABELS[self]

    @property
    def is_post(self) -> bool:
        """True for stitches worked into a base (sc .. dtr)."""
        return self not in (StitchType.Chain, StitchType.Slip)


STITCH_LABELS = {
    StitchType.Chain: "Chain",
    StitchType.SingleCrochet: "Single Crochet",
    StitchType.HalfDoubleCrochet: "Half Double Crochet",
    StitchType.DoubleCrochet: "Double Crochet",
    StitchType.TrebleCrochet: "Treble Crochet",
    StitchType.DoubleTrebleCrochet: "Double Treble Crochet",
    StitchType.Slip: "Slip",
}

# Number of diagonal hash marks drawn across the spine of the long stitches.
STITCH_HASHES = {
    StitchType.HalfDoubleCrochet: 0,
    StitchType.DoubleCrochet: 1,
    StitchType.TrebleCrochet: 2,
    StitchType.DoubleTrebleCrochet: 3,
}


class EditingMode(Enum):
    Adding = "Adding"
    Moving = "Moving"
    Deleting = "Deleting"
    Inserting = "Inserting"
    Viewing = "Viewing"
    Rebasing = "Rebasing"


@dataclass
class Stitch:
    """A node of the pattern graph.

    ``parent`` and ``base`` are ids of other stitches in the same graph, or
    ``None``. ``parent`` follows crochet order; ``base`` is the stitch this one
    is worked into.
    """

    sid: int
    x: float
    y: float
    type: StitchType
    parent: Optional[int] = None
    base: Optional[int] = None

    @property
    def pos(self) -> Tuple[float, float]:
        return self.x, self.y

    def __repr__(self):
        return f"Stitch({self.sid}, {self.type.name}, parent={self.parent}, base={self.base})"
