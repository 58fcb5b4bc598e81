"""Chord data model for chord-sheet.

A chord is a root note plus a quality. Qualities use the short Harte
names ("maj", "min", "dim") internally and render with the familiar
lead-sheet suffixes ("", "m", "dim").
"""

from dataclasses import dataclass

# Mapping from quality name to display suffix
QUALITY_TO_SUFFIX: dict[str, str] = {
    "maj": "",
    "min": "m",
    "dim": "dim",
}


@dataclass(frozen=True)
class Chord:
    """A diatonic or palette chord.

    Parameters
    ----------
    root : str
        The root note, sharp spelling (e.g., "C", "F#").
    quality : str
        One of "maj", "min", "dim".

    Examples
    --------
    >>> Chord(root="A", quality="min").name
    'Am'
    >>> Chord(root="B", quality="dim").name
    'Bdim'
    """

    root: str
    quality: str

    @property
    def suffix(self) -> str:
        """Display suffix for the quality ("" for major)."""
        try:
            return QUALITY_TO_SUFFIX[self.quality]
        except KeyError:
            msg = f"Unknown chord quality: {self.quality}"
            raise ValueError(msg) from None

    @property
    def name(self) -> str:
        """Display name, root spelling followed by the quality suffix."""
        return f"{self.root}{self.suffix}"

    def __str__(self) -> str:
        return self.name
