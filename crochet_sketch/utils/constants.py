# -*- coding: utf-8 -*-
"""UI constants and colors."""

from PyQt6.QtGui import QColor

BACKGROUND = QColor(255, 255, 255)
STITCH = QColor(0, 0, 0)
HIGHLIGHT = QColor(220, 0, 0)
GRAY = QColor(128, 128, 128)
SELECTED = QColor(0, 128, 0)
CROCHET_PATH = QColor(220, 0, 0)

ANCHOR_OUTLINE = GRAY
ANCHOR_HOVER = GRAY
GHOST = GRAY
SELECTION_BOX = SELECTED

STITCH_PEN_WIDTH = 1.0
# Half-length of the bar drawn across single crochet and long-stitch heads.
CROSSBAR_HALF = 10.0
HASH_HALF = 5.0
