"""Console visualisation of the two voices.

Each beat redraws two rows, voice A on top and voice B indented by three
columns per beat of rotation, so the phase offset is visible as a shift::

	          ░░ ░░ ██    ░░ ░░    ░░    ░░ ░░
	
	             ░░ ░░ ██    ░░ ░░    ░░    ░░ ░░

Accents are ``░░``, the accent under the current beat is ``██`` and rests are
blank. A block of empty lines follows each frame so the terminal scrolls one
frame per beat. The display is advisory: nothing in the engine reads it.
"""

import logging
import sys
import typing


_REST = " "
_ACCENT = "░"
_CURRENT = "█"

_LEFT_MARGIN = 10
_CELL_WIDTH = 3
_SPACER_LINES = 20


logger = logging.getLogger(__name__)


def render_marks (marks: typing.Sequence[bool], offset: int, step: int) -> str:

	"""Render one voice as a row of glyphs.

	Parameters:
		marks: The unrotated pattern.
		offset: Rotation of this voice; shifts the row right by three columns per beat.
		step: Current beat index in the cycle.

	The highlighted cell is ``(step - offset) mod len(marks)``, which is the
	pattern position this voice is playing on beat ``step``.
	"""

	if not marks:
		return ""

	current = (step - offset) % len(marks)
	cells = []

	for i, mark in enumerate(marks):

		if not mark:
			block = _REST
		elif i != current:
			block = _ACCENT
		else:
			block = _CURRENT

		cells.append(block * 2 + " ")

	return " " * (_LEFT_MARGIN + offset * _CELL_WIDTH) + "".join(cells)


class PatternDisplay:

	"""
	Writes a two-row frame per beat to a text stream.

	Subscribe it to the sequencer's ``"beat"`` event::

		display = PatternDisplay()
		sequencer.on_event("beat", display.show_beat)
	"""

	def __init__ (self, stream: typing.Optional[typing.TextIO] = None, spacer_lines: int = _SPACER_LINES) -> None:

		self.stream = stream if stream is not None else sys.stdout
		self.spacer_lines = spacer_lines
		self.enabled = True

	def clear (self) -> None:

		"""Push previous terminal output out of view."""

		try:
			self.stream.write("\n" * self.spacer_lines)
			self.stream.flush()
		except BrokenPipeError:
			logger.warning("Display stream closed, disabling pattern display")
			self.enabled = False

	def show_beat (self, pattern: typing.Sequence[bool], rotation: int, index: int) -> None:

		"""Draw both voices with beat ``index`` highlighted.

		If the stream has been closed by its reader (e.g. output piped into
		``head``) the display turns itself off and the performance carries on.
		"""

		if not self.enabled:
			return

		frame = (
			render_marks(pattern, 0, index) + "\n"
			+ "\n"
			+ render_marks(pattern, rotation, index) + "\n"
			+ "\n" * self.spacer_lines
		)

		try:
			self.stream.write(frame)
			self.stream.flush()
		except BrokenPipeError:
			logger.warning("Display stream closed, disabling pattern display")
			self.enabled = False
