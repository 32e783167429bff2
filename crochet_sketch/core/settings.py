# -*- coding: utf-8 -*-
"""Editor settings (canvas size, hit-test radius, symbol sizes)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

ENV_HOVER_RADIUS = "CROCHET_SKETCH_HOVER_RADIUS"
ENV_FRAME_MS = "CROCHET_SKETCH_FRAME_MS"


@dataclass
class EditorSettings:
    canvas_width: int = 800
    canvas_height: int = 600
    # Pointer distance (px) within which an anchor counts as hovered.
    hover_radius: float = 20.0
    anchor_dot_diameter: float = 12.0
    slip_stitch_diameter: float = 8.0
    # Gap left between a stitch symbol and the stitch it hangs from.
    inter_stitch_space: float = 8.0
    frame_interval_ms: int = 16

    @property
    def canvas_center(self) -> tuple[float, float]:
        return self.canvas_width / 2.0, self.canvas_height / 2.0

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorSettings":
        env = os.environ if environ is None else environ
        settings = cls()
        raw = env.get(ENV_HOVER_RADIUS)
        if raw:
            try:
                value = float(raw)
                if value <= 0:
                    raise ValueError(raw)
                settings.hover_radius = value
            except ValueError:
                logger.warning("Ignoring invalid %s=%r", ENV_HOVER_RADIUS, raw)
        raw = env.get(ENV_FRAME_MS)
        if raw:
            try:
                value = int(raw)
                if value <= 0:
                    raise ValueError(raw)
                settings.frame_interval_ms = value
            except ValueError:
                logger.warning("Ignoring invalid %s=%r", ENV_FRAME_MS, raw)
        return settings
