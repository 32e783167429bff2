import json
from datetime import datetime

import pytest

from crochet_sketch.core.errors import PatternFormatError
from crochet_sketch.core.graph import StitchGraph
from crochet_sketch.core.serializer import (
    export_filename,
    json_to_stitches,
    records_to_graph,
    stitches_to_json,
    to_records,
)
from crochet_sketch.core.stitches import StitchType


def sample_graph():
    g = StitchGraph.new(400, 300)
    ch1 = g.add_stitch(450, 300, StitchType.Chain)
    ch2 = g.add_stitch(500, 300, StitchType.Chain)
    g.add_stitch(500, 250, StitchType.DoubleCrochet, base=ch1.sid)
    g.add_stitch(450, 250, StitchType.SingleCrochet, base=ch2.sid)
    return g


class TestExport:

    def test_single_chain_scenario(self):
        g = StitchGraph.new(400, 300)
        g.add_stitch(450, 300, StitchType.Chain)
        assert json.loads(stitches_to_json(g)) == [
            {"x": 400, "y": 300, "parent": None, "base": None, "type": 6},
            {"x": 450, "y": 300, "parent": 0, "base": None, "type": 0},
        ]

    def test_indices_follow_collection_order_after_delete(self):
        g = sample_graph()
        g.delete_stitch(1)
        records = to_records(g)
        assert len(records) == 4
        # the dc was based on the deleted chain; it falls back to the sentinel
        assert records[2]["base"] == 0
        assert records[1]["parent"] == 0

    def test_filename(self):
        name = export_filename(datetime(2024, 3, 5, 14, 7, 9, 123456))
        assert name == "exported pattern - 2024-03-05T14:07:09.json"


class TestImport:

    def test_round_trip_preserves_structure(self):
        g = sample_graph()
        g.delete_stitch(2)
        g2 = json_to_stitches(stitches_to_json(g))
        assert [(s.x, s.y, s.type) for s in g2] == [(s.x, s.y, s.type) for s in g]
        assert to_records(g2) == to_records(g)

    def test_cursor_and_sentinel(self):
        g = json_to_stitches(stitches_to_json(sample_graph()))
        assert g.sentinel_id == 0
        assert g.next_parent == len(g) - 1
        assert g.delete_stitch(0) is False

    def test_new_ids_continue_after_import(self):
        g = json_to_stitches(stitches_to_json(sample_graph()))
        s = g.add_stitch(0, 0, StitchType.Chain)
        assert s.sid == 5

    def test_missing_y_names_field(self):
        data = [
            {"x": 400, "y": 300, "parent": None, "base": None, "type": 6},
            {"x": 450, "parent": 0, "base": None, "type": 0},
        ]
        with pytest.raises(PatternFormatError) as exc:
            records_to_graph(data)
        assert exc.value.field == "y"
        assert exc.value.index == 1
        assert "y" in str(exc.value)

    @pytest.mark.parametrize(
        "patch, field",
        [
            ({"x": "400"}, "x"),
            ({"y": True}, "y"),
            ({"parent": "0"}, "parent"),
            ({"parent": 7}, "parent"),
            ({"base": -1}, "base"),
            ({"base": 0.5}, "base"),
            ({"type": 7}, "type"),
            ({"type": -1}, "type"),
            ({"type": None}, "type"),
        ],
    )
    def test_invalid_fields(self, patch, field):
        rec = {"x": 450, "y": 300, "parent": 0, "base": None, "type": 0}
        rec.update(patch)
        data = [{"x": 400, "y": 300, "parent": None, "base": None, "type": 6}, rec]
        with pytest.raises(PatternFormatError) as exc:
            records_to_graph(data)
        assert exc.value.field == field

    def test_missing_nullable_field_is_rejected(self):
        data = [{"x": 400, "y": 300, "base": None, "type": 6}]
        with pytest.raises(PatternFormatError) as exc:
            records_to_graph(data)
        assert exc.value.field == "parent"

    def test_integral_floats_are_accepted(self):
        data = [
            {"x": 400, "y": 300, "parent": None, "base": None, "type": 6.0},
            {"x": 450.5, "y": 300, "parent": 0.0, "base": None, "type": 0},
        ]
        g = records_to_graph(data)
        assert g.get(1).parent == 0
        assert g.get(0).type == StitchType.Slip

    @pytest.mark.parametrize("text", ["{}", "[]", "not json", "[1, 2]"])
    def test_document_level_failures(self, text):
        with pytest.raises(PatternFormatError):
            json_to_stitches(text)

    @pytest.mark.parametrize("value", ["1" + "0" * 400, "NaN", "Infinity", "-Infinity"])
    def test_non_finite_coordinates_are_rejected(self, value):
        text = '[{"x": %s, "y": 0, "parent": null, "base": null, "type": 6}]' % value
        with pytest.raises(PatternFormatError) as exc:
            json_to_stitches(text)
        assert exc.value.field == "x"
        assert exc.value.index == 0

    def test_huge_y_on_later_stitch(self):
        text = (
            '[{"x": 0, "y": 0, "parent": null, "base": null, "type": 6},'
            ' {"x": 1, "y": -1' + "0" * 400 + ', "parent": 0, "base": null, "type": 0}]'
        )
        with pytest.raises(PatternFormatError) as exc:
            json_to_stitches(text)
        assert exc.value.field == "y"
        assert exc.value.index == 1

    def test_bytes_are_accepted(self):
        g = json_to_stitches(stitches_to_json(sample_graph()).encode("utf-8"))
        assert len(g) == 5

    def test_undecodable_bytes_are_a_format_error(self):
        with pytest.raises(PatternFormatError):
            json_to_stitches(b"[\xff\xfe]")

    @pytest.mark.parametrize(
        "patch, field",
        [
            ({"type": 0}, "type"),
            ({"parent": 0}, "parent"),
            ({"base": 0}, "base"),
        ],
    )
    def test_first_record_must_be_a_bare_slip(self, patch, field):
        rec = {"x": 400, "y": 300, "parent": None, "base": None, "type": 6}
        rec.update(patch)
        with pytest.raises(PatternFormatError) as exc:
            records_to_graph([rec])
        assert exc.value.field == field
        assert exc.value.index == 0
