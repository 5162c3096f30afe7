"""Minimal pitch value types: letter names, modifiers, spellings, spelled pitches.

Also hosts the small normalization helpers (`mod`, `swapped`, `ordered`)
shared by the interval and speller modules.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Tuple, TypeVar

T = TypeVar("T")

# Pitch classes of the natural letter names, C through B
_NATURAL_PITCH_CLASSES = (0, 2, 4, 5, 7, 9, 11)


def mod(value: int, modulus: int) -> int:
    """Modulo whose result has the sign of the modulus (always >= 0 for modulus > 0)."""
    return value % modulus


def swapped(a: T, b: T, predicate: Callable[[T, T], bool]) -> Tuple[T, T, bool]:
    """Return ``(b, a, True)`` if ``predicate(a, b)`` holds, else ``(a, b, False)``."""
    if predicate(a, b):
        return b, a, True
    return a, b, False


def ordered(a: Spelling, b: Spelling) -> Tuple[Spelling, Spelling]:
    """Order two spellings so that the letter distance from the first to the second
    is the smaller of the two directions (at most a fourth)."""
    a, b, _ = swapped(a, b, lambda x, y: steps(x, y) > steps(y, x))
    return a, b


def steps(a: Spelling, b: Spelling) -> int:
    """Letter-name steps from ``a`` up to ``b``, modulo 7."""
    return mod(b.letter.steps - a.letter.steps, 7)


class LetterName(IntEnum):
    """Letter names in diatonic order."""

    C = 0
    D = 1
    E = 2
    F = 3
    G = 4
    A = 5
    B = 6

    @property
    def steps(self) -> int:
        return int(self)

    @property
    def pitch_class(self) -> int:
        return _NATURAL_PITCH_CLASSES[self]

    @classmethod
    def from_pitch_class(cls, pitch_class: int) -> LetterName:
        """Letter of a natural pitch class.

        Raises:
            ValueError: If ``pitch_class`` is not natural (a black key).
        """
        try:
            return cls(_NATURAL_PITCH_CLASSES.index(mod(pitch_class, 12)))
        except ValueError:
            raise ValueError(f"Pitch class {pitch_class} has no natural spelling") from None

    def shifted(self, amount: int) -> LetterName:
        return LetterName(mod(self + amount, 7))


class Modifier(IntEnum):
    """Accidentals, valued by their adjustment in semitones."""

    DOUBLE_FLAT = -2
    FLAT = -1
    NATURAL = 0
    SHARP = 1
    DOUBLE_SHARP = 2

    @property
    def symbol(self) -> str:
        return _MODIFIER_SYMBOLS[self]


_MODIFIER_SYMBOLS = {
    Modifier.DOUBLE_FLAT: "𝄫",
    Modifier.FLAT: "♭",
    Modifier.NATURAL: "",
    Modifier.SHARP: "♯",
    Modifier.DOUBLE_SHARP: "𝄪",
}

_MODIFIER_ALIASES = {
    "": Modifier.NATURAL,
    "n": Modifier.NATURAL,
    "♮": Modifier.NATURAL,
    "#": Modifier.SHARP,
    "♯": Modifier.SHARP,
    "s": Modifier.SHARP,
    "b": Modifier.FLAT,
    "♭": Modifier.FLAT,
    "##": Modifier.DOUBLE_SHARP,
    "x": Modifier.DOUBLE_SHARP,
    "𝄪": Modifier.DOUBLE_SHARP,
    "bb": Modifier.DOUBLE_FLAT,
    "𝄫": Modifier.DOUBLE_FLAT,
}


@dataclass(frozen=True, order=True)
class Spelling:
    """Letter name plus modifier, e.g. C♯ or E♭."""

    letter: LetterName
    modifier: Modifier = Modifier.NATURAL

    @property
    def pitch_class(self) -> int:
        return mod(self.letter.pitch_class + self.modifier, 12)

    @classmethod
    def from_string(cls, text: str) -> Spelling:
        """Parse spellings such as ``"D"``, ``"Eb"``, ``"C#"``, ``"F♯"``, ``"Bbb"``.

        Raises:
            ValueError: If the text is not a recognized spelling.
        """
        stripped = text.strip()
        if not stripped:
            raise ValueError("Empty spelling")
        try:
            letter = LetterName[stripped[0].upper()]
            modifier = _MODIFIER_ALIASES[stripped[1:]]
        except KeyError:
            raise ValueError(f"Unrecognized spelling '{text}'") from None
        return cls(letter, modifier)

    def __str__(self) -> str:
        return f"{self.letter.name}{self.modifier.symbol}"


@dataclass(frozen=True)
class SpelledPitch:
    """A MIDI note number together with its spelling.

    Attributes:
        note_number: MIDI note number (60 is middle C, C4).
        spelling: Spelling whose pitch class matches ``note_number``.
    """

    note_number: int
    spelling: Spelling

    def __post_init__(self) -> None:
        if mod(self.note_number, 12) != self.spelling.pitch_class:
            raise ValueError(
                f"Spelling {self.spelling} does not match note number {self.note_number}"
            )

    @property
    def octave(self) -> int:
        """Octave of the written letter; B♯3 and C4 share note number 60."""
        written = self.note_number - self.spelling.modifier
        return (written - self.spelling.letter.pitch_class) // 12 - 1

    def __str__(self) -> str:
        return f"{self.spelling}{self.octave}"
