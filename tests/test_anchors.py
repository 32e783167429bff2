from collections import ChainMap

import pytest

from crochet_sketch.core.anchors import (
    anchor_for_mode,
    attach_anchor,
    head_anchor,
    middle_anchor,
    stitch_segments,
)
from crochet_sketch.core.errors import StitchIntegrityError
from crochet_sketch.core.graph import StitchGraph
from crochet_sketch.core.stitches import EditingMode, Stitch, StitchType


@pytest.fixture
def graph():
    # S0 (slip, 400,300) <- ch (440,300) <- sc (440,260, base ch) <- dc (480,260, base S0)
    g = StitchGraph.new(400, 300)
    g.add_stitch(440, 300, StitchType.Chain)
    g.add_stitch(440, 260, StitchType.SingleCrochet, base=1)
    g.add_stitch(480, 260, StitchType.DoubleCrochet, base=0)
    return g


class TestAnchors:

    def test_head_is_position(self, graph):
        for s in graph:
            assert head_anchor(s) == s.pos

    def test_slip_middle_is_head(self, graph):
        s0 = graph.sentinel
        assert middle_anchor(graph.stitches, s0) == s0.pos

    def test_chain_middle_is_between_parent_and_head(self, graph):
        ch = graph.get(1)
        assert middle_anchor(graph.stitches, ch) == (420.0, 300.0)
        assert attach_anchor(graph.stitches, ch) == (420.0, 300.0)

    def test_chain_without_parent_uses_head(self):
        ch = Stitch(0, 10, 20, StitchType.Chain)
        assert middle_anchor({0: ch}, ch) == (10.0, 20.0)

    def test_post_stitch_middle_uses_base_attach(self, graph):
        sc = graph.get(2)
        # base is the chain, whose attach point is its middle (420, 300)
        assert middle_anchor(graph.stitches, sc) == (430.0, 280.0)
        assert attach_anchor(graph.stitches, sc) == sc.pos

    def test_post_stitch_on_slip_base(self, graph):
        dc = graph.get(3)
        assert middle_anchor(graph.stitches, dc) == (440.0, 280.0)

    def test_post_stitch_without_base_uses_head(self):
        sc = Stitch(5, 1, 2, StitchType.TrebleCrochet, parent=None, base=None)
        assert middle_anchor({5: sc}, sc) == (1.0, 2.0)

    def test_missing_reference_is_an_integrity_error(self):
        sc = Stitch(5, 1, 2, StitchType.SingleCrochet, parent=None, base=9)
        with pytest.raises(StitchIntegrityError):
            middle_anchor({5: sc}, sc)


class TestAnchorForMode:

    @pytest.mark.parametrize("mode", [EditingMode.Moving, EditingMode.Viewing, EditingMode.Inserting])
    def test_head_modes(self, graph, mode):
        for s in graph:
            assert anchor_for_mode(graph.stitches, s, mode, False, graph.next_parent) == s.pos

    def test_deleting_uses_middle(self, graph):
        sc = graph.get(2)
        assert anchor_for_mode(graph.stitches, sc, EditingMode.Deleting, False, None) == (430.0, 280.0)

    def test_rebasing_depends_on_drag(self, graph):
        ch = graph.get(1)
        sc = graph.get(2)
        assert anchor_for_mode(graph.stitches, sc, EditingMode.Rebasing, False, None) == (430.0, 280.0)
        assert anchor_for_mode(graph.stitches, sc, EditingMode.Rebasing, True, None) == sc.pos
        assert anchor_for_mode(graph.stitches, ch, EditingMode.Rebasing, True, None) == (420.0, 300.0)

    def test_adding_next_parent_uses_head(self, graph):
        ch = graph.get(1)
        assert anchor_for_mode(graph.stitches, ch, EditingMode.Adding, False, ch.sid) == ch.pos
        assert anchor_for_mode(graph.stitches, ch, EditingMode.Adding, False, 3) == (420.0, 300.0)


class TestSegments:

    def test_chain_segments(self, graph):
        seg = stitch_segments(graph.stitches, graph.get(1))
        assert seg.head == (440.0, 300.0)
        assert seg.parent_head == (400.0, 300.0)
        assert seg.base_attach is None

    def test_long_stitch_needs_parent_and_base(self, graph):
        seg = stitch_segments(graph.stitches, graph.get(3))
        assert seg.parent_head == (440.0, 260.0)
        assert seg.base_attach == (400.0, 300.0)

    def test_chain_without_parent_fails(self):
        ch = Stitch(0, 0, 0, StitchType.Chain)
        with pytest.raises(StitchIntegrityError):
            stitch_segments({0: ch}, ch)

    def test_single_crochet_without_base_fails(self):
        sc = Stitch(0, 0, 0, StitchType.SingleCrochet)
        with pytest.raises(StitchIntegrityError):
            stitch_segments({0: sc}, sc)

    def test_ghost_over_placeholder(self, graph):
        placeholder = Stitch(-2, 10, 10, StitchType.Slip)
        ghost = Stitch(-1, 20, 20, StitchType.SingleCrochet, parent=0, base=-2)
        stitches = ChainMap({-1: ghost, -2: placeholder}, graph.stitches)
        seg = stitch_segments(stitches, ghost)
        assert seg.base_attach == (10.0, 10.0)
        assert -1 not in graph
