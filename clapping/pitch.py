"""Pitch name to MIDI note number conversion.

Notes are addressed as a ``(letter, octave)`` pair, e.g. ``("C", 3)``. The
numbering is a plain twelve-semitone scheme with **C0 = 0**, so every octave
adds 12::

	note_number("C", 3)   # 36
	note_number("A", 4)   # 57
	note_number("F#", 2)  # 30

The mapping is injective over the playable range (0-127). Pairs that fall
outside it raise ``ValueError`` rather than being clamped.
"""

import typing

import clapping.constants


Note = typing.Tuple[str, int]


NOTE_NAME_TO_PC: typing.Dict[str, int] = {
	"C": 0,
	"C#": 1,
	"Db": 1,
	"D": 2,
	"D#": 3,
	"Eb": 3,
	"E": 4,
	"F": 5,
	"F#": 6,
	"Gb": 6,
	"G": 7,
	"G#": 8,
	"Ab": 8,
	"A": 9,
	"A#": 10,
	"Bb": 10,
	"B": 11,
}


def pitch_class (letter: str) -> int:

	"""Return the pitch class (0-11) of a note letter.

	Raises:
		ValueError: If the letter is not a recognised note name.
	"""

	if letter not in NOTE_NAME_TO_PC:
		raise ValueError(f"Unknown note name {letter!r}. Expected one of: {', '.join(NOTE_NAME_TO_PC)}")

	return NOTE_NAME_TO_PC[letter]


def note_number (letter: str, octave: int) -> int:

	"""Map a letter and octave to a MIDI note number.

	Parameters:
		letter: Note name (``"C"``, ``"F#"``, ``"Bb"``).
		octave: Octave number, C0 being note 0.

	Raises:
		ValueError: If the letter is unknown or the result is outside 0-127.
	"""

	number = octave * 12 + pitch_class(letter)

	if not clapping.constants.MIN_NOTE <= number <= clapping.constants.MAX_NOTE:
		raise ValueError(f"{letter}{octave} maps to note {number}, outside the MIDI range 0-127")

	return number
