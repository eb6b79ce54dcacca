"""The fixed material of the piece: one accent pattern and two triads.

A ``Score`` is frozen and passed explicitly to the sequencer and the
performance driver, so nothing in the engine reads shared globals.
``CLAPPING_MUSIC`` is the canonical instance.
"""

import dataclasses
import typing

import clapping.pitch


Pattern = typing.Tuple[bool, ...]
Triad = typing.Tuple[clapping.pitch.Note, ...]


@dataclasses.dataclass (frozen=True)
class Score:

	"""
	Immutable description of what the two performers play.

	Attributes:
		pattern: Accent flags for one cycle. Both voices play this pattern,
			voice B rotated against voice A.
		triad_a: Pitches sounded when voice A accents a beat.
		triad_b: Pitches sounded when voice B accents a beat.
	"""

	pattern: Pattern
	triad_a: Triad
	triad_b: Triad

	def __post_init__ (self) -> None:

		if not self.pattern:
			raise ValueError("Score pattern must contain at least one beat")

		if not self.triad_a or not self.triad_b:
			raise ValueError("Score triads must contain at least one note each")

		# Fail early on unplayable pitches rather than mid-performance.
		for letter, octave in self.triad_a + self.triad_b:
			clapping.pitch.note_number(letter, octave)

	@property
	def length (self) -> int:

		"""Number of beats in one cycle."""

		return len(self.pattern)


CLAPPING_MUSIC = Score(
	pattern = (True, True, True, False, True, True, False, True, False, True, True, False),
	triad_a = (("C", 3), ("D", 4), ("E", 5)),
	triad_b = (("G", 3), ("A", 4), ("B", 5)),
)
