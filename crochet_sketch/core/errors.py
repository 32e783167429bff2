# -*- coding: utf-8 -*-
"""Exceptions raised by the pattern core."""

from __future__ import annotations

from typing import Optional


class PatternFormatError(ValueError):
    """An imported pattern failed validation.

    ``field`` names the offending record field (``None`` for document-level
    problems) and ``index`` the offending record.
    """

    def __init__(self, message: str, field: Optional[str] = None, index: Optional[int] = None):
        super().__init__(message)
        self.field = field
        self.index = index


class StitchIntegrityError(AssertionError):
    """A stitch is missing a reference its type structurally requires."""

    def __init__(self, sid: int, message: str):
        super().__init__(f"Stitch {sid}: {message}")
        self.sid = sid
