"""Phase sequencer: renders one cycle of the two rotated voices.

Voice A plays the score's pattern as written. Voice B plays the same pattern
rotated right by ``rotation`` beats. Each beat becomes a chord (triad A, triad
B, both layered, or a rest) that is handed to the ``NoteEmitter`` and held
before the next beat starts.
"""

import logging
import typing

import clapping.constants
import clapping.emitter
import clapping.event_emitter
import clapping.pitch
import clapping.score


logger = logging.getLogger(__name__)


def rotate_right (pattern: typing.Sequence[bool], rotation: int) -> typing.Tuple[bool, ...]:

	"""
	Cyclically rotate a pattern right by ``rotation`` positions.

	The rotation is normalised into ``[0, len(pattern))``, so negative values
	rotate left and values larger than the pattern wrap around.

	Example:
		```python
		rotate_right([True, False, False], 1)   # (False, True, False)
		rotate_right([True, False, False], -1)  # (False, False, True)
		```
	"""

	if not pattern:
		return ()

	shift = rotation % len(pattern)

	if shift == 0:
		return tuple(pattern)

	return tuple(pattern[-shift:]) + tuple(pattern[:-shift])


def build_chord (
	accent_a: bool,
	accent_b: bool,
	triad_a: clapping.score.Triad,
	triad_b: clapping.score.Triad
) -> typing.Tuple[clapping.pitch.Note, ...]:

	"""Return the pitches to sound for one beat.

	Triad A when only voice A accents, triad B when only voice B accents,
	both layered into one chord when they coincide, and an empty tuple (a
	rest) when neither does.
	"""

	notes: typing.Tuple[clapping.pitch.Note, ...] = ()

	if accent_a:
		notes += tuple(triad_a)

	if accent_b:
		notes += tuple(triad_b)

	return notes


def beat_timing (index: int, length: int, velocity: int, is_final_cycle: bool) -> typing.Tuple[int, int]:

	"""Return ``(duration_ms, velocity)`` for the beat at ``index``.

	Every beat lasts 200 ms at the given velocity, except the last two beats
	of the final cycle, which last 1000 ms and are 10 louder.
	"""

	if is_final_cycle and index >= length - clapping.constants.FINAL_BEAT_COUNT:
		return clapping.constants.FINAL_BEAT_DURATION_MS, velocity + clapping.constants.FINAL_VELOCITY_BOOST

	return clapping.constants.BEAT_DURATION_MS, velocity


class PhaseSequencer:

	"""
	Plays cycles of the score through a ``NoteEmitter``.

	The sequencer keeps no state between calls; the rotation for each cycle
	comes from the caller. Beats are rendered strictly in order and each
	``play`` call returns (hold included) before the next beat begins. Any
	emitter failure propagates immediately and the rest of the cycle is not
	played.

	Events:
		``"beat"``: fired before each beat is played with
			``(pattern, rotation, index)``.
	"""

	def __init__ (self, emitter: clapping.emitter.NoteEmitter, score: clapping.score.Score) -> None:

		self.emitter = emitter
		self.score = score
		self.events = clapping.event_emitter.EventEmitter()

	def on_event (self, event_name: str, callback: typing.Callable[..., typing.Any]) -> None:

		"""Register a listener, e.g. ``sequencer.on_event("beat", display.show_beat)``."""

		self.events.on(event_name, callback)

	def render_cycle (
		self,
		pattern: typing.Optional[typing.Sequence[bool]],
		rotation: int,
		velocity: int,
		is_final_cycle: bool = False
	) -> None:

		"""Play one full traversal of the pattern with voice B rotated by ``rotation``.

		Parameters:
			pattern: Accent pattern for both voices. ``None`` uses the score's pattern.
			rotation: Beats voice B is shifted right, taken modulo the pattern length.
			velocity: Base note velocity.
			is_final_cycle: Slow down and accent the last two beats.
		"""

		voice_a = tuple(self.score.pattern if pattern is None else pattern)

		if not voice_a:
			raise ValueError("Cannot render an empty pattern")

		voice_b = rotate_right(voice_a, rotation)
		length = len(voice_a)

		logger.debug(f"Cycle rotation={rotation % length} velocity={velocity} final={is_final_cycle}")

		for index, (accent_a, accent_b) in enumerate(zip(voice_a, voice_b)):

			self.events.emit("beat", voice_a, rotation % length, index)

			notes = build_chord(accent_a, accent_b, self.score.triad_a, self.score.triad_b)
			duration_ms, beat_velocity = beat_timing(index, length, velocity, is_final_cycle)

			self.emitter.play(notes, beat_velocity, duration_ms)
