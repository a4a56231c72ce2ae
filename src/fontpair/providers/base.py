# -*- coding: utf-8 -*-
"""Base interface for glyph outline providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

Point = Tuple[float, float]


class PathKind(Enum):
    MOVE = "move"
    LINE = "line"
    CUBIC = "cubic"
    QUADRATIC = "quadratic"


@dataclass(frozen=True)
class PathCommand:
    """
    One outline drawing command.

    `points` holds the control points (none for MOVE/LINE, one for QUADRATIC,
    two for CUBIC) followed by the end point.
    """

    kind: PathKind
    points: Tuple[Point, ...]

    @property
    def end(self) -> Point:
        return self.points[-1]

    @property
    def controls(self) -> Tuple[Point, ...]:
        return self.points[:-1]


@dataclass(frozen=True)
class TextMetrics:
    width: float  # summed advance width
    height: float  # ink bounding-box height


class FontHandle:
    """
    A loaded font. Handles are context managers; leaving the block releases
    whatever the backend acquired to open the font.
    """

    def close(self):
        """Release backend resources. Safe to call more than once."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class GlyphOutlineProvider(ABC):
    """Abstract base class for glyph outline backends."""

    name = "base"

    @abstractmethod
    def load_font(self, data: bytes) -> FontHandle:
        """
        Parse font bytes.

        Args:
            data: Raw TTF/OTF/WOFF/WOFF2 bytes.

        Returns:
            A FontHandle, to be used as a context manager.

        Raises:
            FontLoadError: If the bytes are not a readable font.
        """

    @abstractmethod
    def get_outline(self, handle: FontHandle, char: str, font_size: float) -> List[PathCommand]:
        """
        Outline of one character scaled from design units to font_size.

        Raises:
            GlyphNotFoundError: If the character is not mapped by the font.
            OutlineError: If the glyph exists but cannot be drawn.
        """

    @abstractmethod
    def get_text_metrics(self, handle: FontHandle, text: str, font_size: float) -> TextMetrics:
        """Advance width and ink height of `text` at font_size."""
