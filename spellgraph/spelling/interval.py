"""Named intervals between spellings that ignore the order of the two spellings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

from spellgraph.spelling.pitch import Spelling, mod, ordered, steps

# Semitone size of the "neutral" interval for each ordinal: halfway between
# minor and major for imperfect ordinals, exact for perfect ones.
_NEUTRAL_SIZES = (0.0, 1.5, 3.5, 5.0)


class Ordinal(IntEnum):
    UNISON = 0
    SECOND = 1
    THIRD = 2
    FOURTH = 3

    @property
    def is_perfect(self) -> bool:
        return self in (Ordinal.UNISON, Ordinal.FOURTH)


class IntervalQuality(Enum):
    DIMINISHED = "diminished"
    MINOR = "minor"
    PERFECT = "perfect"
    MAJOR = "major"
    AUGMENTED = "augmented"


@dataclass(frozen=True)
class NamedUnorderedInterval:
    """Interval class between two spellings, e.g. major third or diminished fourth.

    Ordinals range over unison to fourth: the two spellings are ordered so
    that the letter distance is at most a fourth, which makes the interval
    independent of argument order.

    Attributes:
        ordinal: Letter distance between the two spellings.
        quality: Interval quality.
        degree: How many times augmented or diminished; zero for perfect,
            major and minor intervals.
    """

    ordinal: Ordinal
    quality: IntervalQuality
    degree: int = 0

    @classmethod
    def between(cls, a: Spelling, b: Spelling) -> NamedUnorderedInterval:
        a, b = ordered(a, b)
        ordinal = Ordinal(steps(a, b))
        size = mod(b.pitch_class - a.pitch_class, 12)

        difference = size - _NEUTRAL_SIZES[ordinal]
        difference = mod(difference + 6, 12) - 6
        if ordinal == Ordinal.UNISON:
            difference = abs(difference)

        if ordinal.is_perfect:
            if difference == 0:
                return cls(ordinal, IntervalQuality.PERFECT)
            degree = int(abs(difference))
        else:
            if abs(difference) == 0.5:
                quality = IntervalQuality.MAJOR if difference > 0 else IntervalQuality.MINOR
                return cls(ordinal, quality)
            degree = int(abs(difference) - 0.5)

        quality = IntervalQuality.AUGMENTED if difference > 0 else IntervalQuality.DIMINISHED
        return cls(ordinal, quality, degree)

    def __str__(self) -> str:
        prefix = {1: "", 2: "doubly ", 3: "triply "}.get(self.degree, f"{self.degree}x ")
        quality = self.quality.value
        if self.degree:
            quality = prefix + quality
        return f"{quality} {self.ordinal.name.lower()}"
