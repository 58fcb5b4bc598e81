"""Pixel offset to character column conversion.

The rendering side measures the average width of one character in the
monospace export font and hands it in; everything here is arithmetic on
that single number.
"""

from __future__ import annotations

import logging
import math

logger = logging.getLogger(__name__)

# Inconsolata at 1rem (16px) is about half an em wide
DEFAULT_CHAR_WIDTH = 8.0


def _usable(width: float | None) -> bool:
    return width is not None and math.isfinite(width) and width > 0


class PlacementEngine:
    """Convert pixel offsets to monospace columns.

    Parameters
    ----------
    char_width : float | None
        Measured pixel width of one character, or None if not measured yet.
    fallback : float
        Width used while no usable measurement is available.

    Examples
    --------
    >>> engine = PlacementEngine(char_width=10.0)
    >>> engine.pixel_to_column(60.0)
    6
    >>> PlacementEngine(char_width=0).char_width
    8.0
    """

    def __init__(self, char_width: float | None = None, fallback: float = DEFAULT_CHAR_WIDTH) -> None:
        if not _usable(fallback):
            msg = f"Fallback character width must be positive, got {fallback}"
            raise ValueError(msg)
        self.fallback = float(fallback)
        self._measured: float | None = None
        if char_width is not None:
            self.set_char_width(char_width)

    @property
    def char_width(self) -> float:
        """The width in effect: the measurement if usable, else the fallback."""
        return self._measured if self._measured is not None else self.fallback

    @property
    def is_measured(self) -> bool:
        return self._measured is not None

    def set_char_width(self, width: float) -> None:
        """Install a measured character width.

        Zero, negative and non-finite widths are ignored and the fallback
        stays in effect.
        """
        if not _usable(width):
            logger.warning("Ignoring character width %r, using fallback %.2f", width, self.fallback)
            self._measured = None
            return
        self._measured = float(width)
        logger.debug("Character width set to %.3f px", self._measured)

    def measure(self, total_width: float, sample: str) -> float:
        """Derive the character width from a rendered sample string.

        Parameters
        ----------
        total_width : float
            Rendered pixel width of ``sample``.
        sample : str
            The measured text.

        Returns
        -------
        float
            The width now in effect.
        """
        if not sample:
            logger.warning("Empty measurement sample, using fallback %.2f", self.fallback)
            self._measured = None
            return self.char_width
        self.set_char_width(total_width / len(sample))
        return self.char_width

    def pixel_to_column(self, offset: float) -> int:
        """Convert a pixel offset to a character column.

        Rounds half up, and never returns a negative column.

        Examples
        --------
        >>> engine = PlacementEngine(char_width=10.0)
        >>> engine.pixel_to_column(15.0)
        2
        >>> engine.pixel_to_column(-30.0)
        0
        """
        column = math.floor(offset / self.char_width + 0.5)
        return max(0, column)

    def column_to_pixel(self, column: int) -> float:
        """Pixel offset of the left edge of ``column``."""
        return max(0, column) * self.char_width
