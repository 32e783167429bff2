# -*- coding: utf-8 -*-
"""Pattern export/import.

The file format is a JSON array with one record per stitch, in collection
order. Edges are stored as indices into that array::

    [{"x": 400, "y": 300, "parent": null, "base": null, "type": 6}, ...]

``type`` is the StitchType ordinal. Import validates every record before
building anything, so a bad file never produces a partial graph.
"""

from __future__ import annotations

import json
import math
import numbers
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from .errors import PatternFormatError
from .graph import StitchGraph
from .stitches import Stitch, StitchType


def to_records(graph: StitchGraph) -> List[Dict[str, Any]]:
    index = {sid: i for i, sid in enumerate(graph.ids())}
    records = []
    for s in graph:
        records.append({
            "x": s.x,
            "y": s.y,
            "parent": index[s.parent] if s.parent is not None else None,
            "base": index[s.base] if s.base is not None else None,
            "type": int(s.type),
        })
    return records


def stitches_to_json(graph: StitchGraph) -> str:
    return json.dumps(to_records(graph), allow_nan=False)


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _as_index(value: Any) -> Optional[int]:
    """Integral JSON numbers (3 or 3.0) as int, anything else None."""
    if not _is_number(value):
        return None
    if isinstance(value, float) and not value.is_integer():
        return None
    return int(value)


def _check_record(rec: Any, i: int, count: int) -> None:
    if not isinstance(rec, dict):
        raise PatternFormatError(f"Stitch {i} is not an object", index=i)
    for key in ("x", "y"):
        if key not in rec:
            raise PatternFormatError(f"Stitch {i} is missing {key}", field=key, index=i)
        if not _is_number(rec[key]):
            raise PatternFormatError(f"Stitch {i} has invalid {key}", field=key, index=i)
        try:
            finite = math.isfinite(float(rec[key]))
        except OverflowError:
            finite = False
        if not finite:
            raise PatternFormatError(f"Stitch {i} has non-finite {key}", field=key, index=i)
    for key in ("parent", "base"):
        if key not in rec:
            raise PatternFormatError(f"Stitch {i} is missing {key}", field=key, index=i)
        if rec[key] is None:
            continue
        ref = _as_index(rec[key])
        if ref is None:
            raise PatternFormatError(f"Stitch {i} has invalid {key}", field=key, index=i)
        if not 0 <= ref < count:
            raise PatternFormatError(
                f"Stitch {i} has out-of-range {key} {ref} (pattern has {count} stitches)",
                field=key,
                index=i,
            )
    if "type" not in rec:
        raise PatternFormatError(f"Stitch {i} is missing type", field="type", index=i)
    t = _as_index(rec["type"])
    if t is None:
        raise PatternFormatError(f"Stitch {i} has invalid type", field="type", index=i)
    if not 0 <= t < len(StitchType):
        raise PatternFormatError(
            f"Stitch {i} has unknown type {t} (expected 0..{len(StitchType) - 1})",
            field="type",
            index=i,
        )
    if i == 0:
        _check_sentinel(rec)


def _check_sentinel(rec: Dict[str, Any]) -> None:
    """The first record is the sentinel: a Slip with no edges."""
    if _as_index(rec["type"]) != StitchType.Slip:
        raise PatternFormatError("Stitch 0 must be a Slip", field="type", index=0)
    for key in ("parent", "base"):
        if rec[key] is not None:
            raise PatternFormatError(f"Stitch 0 must have a null {key}", field=key, index=0)


def records_to_graph(data: Any) -> StitchGraph:
    if not isinstance(data, list):
        raise PatternFormatError("Pattern is not an array")
    if not data:
        raise PatternFormatError("Pattern contains no stitches")
    for i, rec in enumerate(data):
        _check_record(rec, i, len(data))
    stitches = [
        Stitch(
            i,
            float(rec["x"]),
            float(rec["y"]),
            StitchType(_as_index(rec["type"])),
            _as_index(rec["parent"]) if rec["parent"] is not None else None,
            _as_index(rec["base"]) if rec["base"] is not None else None,
        )
        for i, rec in enumerate(data)
    ]
    return StitchGraph.from_stitches(stitches)


def json_to_stitches(text: Union[str, bytes]) -> StitchGraph:
    """Parse a pattern document; raw bytes are decoded as JSON text."""
    try:
        data = json.loads(text)
    except UnicodeDecodeError as e:
        raise PatternFormatError(f"Pattern is not valid text: {e}") from e
    except json.JSONDecodeError as e:
        raise PatternFormatError(f"Invalid JSON: {e}") from e
    return records_to_graph(data)


def export_filename(now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"exported pattern - {now.replace(microsecond=0).isoformat()}.json"
