# -*- coding: utf-8 -*-
"""Stitch graph: the ordered stitch arena and every mutation on it.

Stitches are kept in an insertion-ordered ``{sid: Stitch}`` dict. Edges are
stored as stable ids, so deleting a stitch means rewriting the ids held by its
dependents; no stitch ever refers to one that is gone.

Two edge relations share the arena:

- ``parent``: crochet order. Practically a list, with branches only after an
  import or an insert.
- ``base``: the stitch a stitch is worked into. Independent of ``parent``.

The first stitch is the sentinel (a Slip with no edges). It cannot be deleted.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional

from .stitches import Stitch, StitchType


class StitchGraph:
    def __init__(self):
        self.stitches: Dict[int, Stitch] = {}
        self.sentinel_id: Optional[int] = None
        self.next_parent: Optional[int] = None
        self._next_sid = 0

    @classmethod
    def new(cls, x: float, y: float) -> "StitchGraph":
        """A graph holding only the sentinel at (x, y)."""
        graph = cls()
        sentinel = graph._create_stitch(x, y, StitchType.Slip, None, None)
        graph.sentinel_id = sentinel.sid
        graph.next_parent = sentinel.sid
        return graph

    @classmethod
    def from_stitches(cls, stitches: List[Stitch]) -> "StitchGraph":
        """Adopt prebuilt stitches in order; the first becomes the sentinel.

        The next-parent cursor starts at the last stitch.
        """
        if not stitches:
            raise ValueError("A stitch graph needs at least one stitch")
        graph = cls()
        for s in stitches:
            if s.sid in graph.stitches:
                raise ValueError(f"Duplicate stitch id {s.sid}")
            graph.stitches[s.sid] = s
            graph._next_sid = max(graph._next_sid, s.sid + 1)
        for s in stitches:
            for ref in (s.parent, s.base):
                if ref is not None and ref not in graph.stitches:
                    raise KeyError(ref)
        graph.sentinel_id = stitches[0].sid
        graph.next_parent = stitches[-1].sid
        return graph

    # ---- Queries ----

    def __len__(self) -> int:
        return len(self.stitches)

    def __iter__(self) -> Iterator[Stitch]:
        return iter(list(self.stitches.values()))

    def __contains__(self, sid) -> bool:
        return sid in self.stitches

    def get(self, sid: Optional[int]) -> Optional[Stitch]:
        if sid is None:
            return None
        return self.stitches.get(sid)

    @property
    def sentinel(self) -> Stitch:
        return self.stitches[self.sentinel_id]

    def is_sentinel(self, sid: Optional[int]) -> bool:
        return sid is not None and sid == self.sentinel_id

    def ids(self) -> List[int]:
        return list(self.stitches.keys())

    def children_of(self, sid: int) -> List[Stitch]:
        return [s for s in self.stitches.values() if s.parent == sid]

    def dependents_of(self, sid: int) -> List[Stitch]:
        """Stitches whose base is ``sid``."""
        return [s for s in self.stitches.values() if s.base == sid]

    def base_chain_reaches(self, start: Optional[int], target: int) -> bool:
        """True when following base edges from ``start`` arrives at ``target``."""
        seen = set()
        cur = start
        while cur is not None and cur not in seen:
            if cur == target:
                return True
            seen.add(cur)
            s = self.stitches.get(cur)
            cur = s.base if s is not None else None
        return False

    # ---- Mutations ----

    def _create_stitch(self, x: float, y: float, stitch_type: StitchType,
                       parent: Optional[int], base: Optional[int]) -> Stitch:
        sid = self._next_sid
        self._next_sid += 1
        stitch = Stitch(sid, float(x), float(y), StitchType(stitch_type), parent, base)
        self.stitches[sid] = stitch
        return stitch

    def add_stitch(self, x: float, y: float, stitch_type: StitchType,
                   parent: Optional[int] = None, base: Optional[int] = None) -> Stitch:
        """Append a stitch after ``parent`` (default: the next-parent cursor).

        The first stitch that followed the previous cursor is re-parented onto
        the new stitch, so the new stitch is spliced into crochet order. The
        cursor then advances to the new stitch.
        """
        if parent is None:
            parent = self.next_parent
        for ref in (parent, base):
            if ref is not None and ref not in self.stitches:
                raise KeyError(ref)
        previous = self.next_parent
        child = next((s for s in self.stitches.values() if s.parent == previous), None)
        stitch = self._create_stitch(x, y, stitch_type, parent, base)
        if child is not None:
            child.parent = stitch.sid
        self.next_parent = stitch.sid
        return stitch

    def delete_stitch(self, sid: int) -> bool:
        """Remove a stitch and repair everything that pointed at it.

        Returns False (and changes nothing) for the sentinel or an unknown id.
        """
        if self.is_sentinel(sid) or sid not in self.stitches:
            return False
        stitch = self.stitches[sid]
        fallback_parent = stitch.parent if stitch.parent is not None else self.sentinel_id
        fallback_base = stitch.base if stitch.base is not None else stitch.parent
        for s in self.dependents_of(sid):
            s.base = None if fallback_base == s.sid else fallback_base
        for s in self.children_of(sid):
            s.parent = fallback_parent
        if self.next_parent == sid:
            self.next_parent = fallback_parent
        del self.stitches[sid]
        return True

    def rebase(self, sid: int, new_base: int) -> bool:
        """Attach ``sid`` to ``new_base``.

        No-op (returns False) for unknown ids, self-attachment, or a base that
        already hangs off ``sid``. A refused release leaves the stitch on its
        old base; bases created later are otherwise allowed.
        """
        if sid not in self.stitches or new_base not in self.stitches:
            return False
        if new_base == sid or self.base_chain_reaches(new_base, sid):
            return False
        self.stitches[sid].base = new_base
        return True

    def set_next_parent(self, sid: int) -> None:
        if sid not in self.stitches:
            raise KeyError(sid)
        self.next_parent = sid

    def move_by(self, sids: Iterable[int], dx: float, dy: float) -> None:
        for sid in sids:
            s = self.stitches.get(sid)
            if s is None:
                continue
            s.x += dx
            s.y += dy

    def align(self, sids: Iterable[int], axis: str) -> None:
        """Line the stitches up on their mean x ("vertical") or mean y ("horizontal")."""
        group = [self.stitches[sid] for sid in sids if sid in self.stitches]
        if not group:
            return
        if axis == "vertical":
            mean_x = sum(s.x for s in group) / len(group)
            for s in group:
                s.x = mean_x
        elif axis == "horizontal":
            mean_y = sum(s.y for s in group) / len(group)
            for s in group:
                s.y = mean_y
        else:
            raise ValueError(f"Unknown alignment axis: {axis!r}")
