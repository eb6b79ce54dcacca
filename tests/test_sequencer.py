import io
import typing

import pytest

import clapping.display
import clapping.emitter
import clapping.errors
import clapping.score
import clapping.sequencer


PATTERN = clapping.score.CLAPPING_MUSIC.pattern
TRIAD_A = clapping.score.CLAPPING_MUSIC.triad_a
TRIAD_B = clapping.score.CLAPPING_MUSIC.triad_b


class RecordingEmitter:

	"""Stands in for NoteEmitter and records every play() call."""

	def __init__ (self) -> None:

		self.calls: typing.List[typing.Tuple[typing.Tuple[typing.Any, ...], int, int]] = []

	def play (self, notes: typing.Sequence[typing.Any], velocity: int, duration_ms: int) -> None:

		self.calls.append((tuple(notes), velocity, duration_ms))


def _make_sequencer () -> typing.Tuple[clapping.sequencer.PhaseSequencer, RecordingEmitter]:

	emitter = RecordingEmitter()
	sequencer = clapping.sequencer.PhaseSequencer(emitter, clapping.score.CLAPPING_MUSIC)  # type: ignore[arg-type]
	return sequencer, emitter


@pytest.mark.parametrize("length", [1, 2, 5, 12])
def test_rotation_is_cyclic (length: int) -> None:

	"""Rotating by r then by N - r returns the original pattern."""

	pattern = tuple(i % 3 == 0 for i in range(length))

	for r in range(length + 1):
		once = clapping.sequencer.rotate_right(pattern, r)
		assert clapping.sequencer.rotate_right(once, length - r) == pattern


def test_rotate_right_direction () -> None:

	"""Right rotation moves the last element to the front."""

	assert clapping.sequencer.rotate_right([True, False, False], 1) == (False, True, False)


def test_rotate_right_normalises_negative_and_large () -> None:

	"""Negative and oversized rotations are taken modulo the length."""

	pattern = (True, False, False, False)

	assert clapping.sequencer.rotate_right(pattern, -1) == (False, False, False, True)
	assert clapping.sequencer.rotate_right(pattern, 5) == clapping.sequencer.rotate_right(pattern, 1)


def test_rotate_right_empty () -> None:

	"""An empty pattern rotates to an empty tuple."""

	assert clapping.sequencer.rotate_right([], 3) == ()


def test_build_chord_cases () -> None:

	"""Chords are triad A, triad B, their union, or a rest."""

	assert clapping.sequencer.build_chord(True, True, TRIAD_A, TRIAD_B) == TRIAD_A + TRIAD_B
	assert clapping.sequencer.build_chord(True, False, TRIAD_A, TRIAD_B) == TRIAD_A
	assert clapping.sequencer.build_chord(False, True, TRIAD_A, TRIAD_B) == TRIAD_B
	assert clapping.sequencer.build_chord(False, False, TRIAD_A, TRIAD_B) == ()


def test_build_chord_is_pure () -> None:

	"""The same accents always give the same chord."""

	first = clapping.sequencer.build_chord(True, True, TRIAD_A, TRIAD_B)
	second = clapping.sequencer.build_chord(True, True, TRIAD_A, TRIAD_B)

	assert first == second


def test_beat_timing_regular () -> None:

	"""Outside the final cycle every beat is 200 ms at the base velocity."""

	for index in range(12):
		assert clapping.sequencer.beat_timing(index, 12, 40, False) == (200, 40)


def test_beat_timing_final_cycle () -> None:

	"""Only the last two beats of the final cycle are slowed and accented."""

	timings = [clapping.sequencer.beat_timing(index, 12, 60, True) for index in range(12)]

	assert timings[:10] == [(200, 60)] * 10
	assert timings[10:] == [(1000, 70), (1000, 70)]


def test_render_cycle_visits_beats_in_order () -> None:

	"""Beats 0..N-1 are each visited once, in increasing order."""

	sequencer, _ = _make_sequencer()
	visited: list[int] = []

	sequencer.on_event("beat", lambda pattern, rotation, index: visited.append(index))
	sequencer.render_cycle(PATTERN, 5, 40, False)

	assert visited == list(range(12))


def test_render_cycle_unison_layers_triads () -> None:

	"""At rotation 0 accented beats sound both triads as one chord."""

	sequencer, emitter = _make_sequencer()
	sequencer.render_cycle(PATTERN, 0, 40, False)

	assert len(emitter.calls) == 12

	for accent, (notes, velocity, duration) in zip(PATTERN, emitter.calls):
		assert notes == (TRIAD_A + TRIAD_B if accent else ())
		assert (velocity, duration) == (40, 200)


def test_render_cycle_rotation_one_shifts_voice_b () -> None:

	"""At rotation 1 voice B's first beat is the pattern's last beat (a rest)."""

	sequencer, emitter = _make_sequencer()
	sequencer.render_cycle(PATTERN, 1, 40, False)

	# Beat 0: voice A accents, voice B takes beat 11 (False).
	assert emitter.calls[0][0] == TRIAD_A

	# Beat 3: voice A rests, voice B takes beat 2 (True).
	assert emitter.calls[3][0] == TRIAD_B


def test_render_cycle_final_dynamics () -> None:

	"""The final cycle holds its last two beats for 1000 ms at velocity + 10."""

	sequencer, emitter = _make_sequencer()
	sequencer.render_cycle(PATTERN, 0, 60, True)

	assert [(v, d) for _, v, d in emitter.calls[:10]] == [(60, 200)] * 10
	assert [(v, d) for _, v, d in emitter.calls[10:]] == [(70, 1000)] * 2


def test_render_cycle_rest_beat_plays_empty_chord () -> None:

	"""Rest beats reach the emitter as an empty chord with the full duration."""

	sequencer, emitter = _make_sequencer()
	sequencer.render_cycle(PATTERN, 0, 40, False)

	# Beat 3 rests in both voices at unison.
	assert emitter.calls[3] == ((), 40, 200)


def test_render_cycle_defaults_to_score_pattern () -> None:

	"""Passing no pattern renders the score's own pattern."""

	sequencer, emitter = _make_sequencer()
	sequencer.render_cycle(None, 0, 40)

	assert [bool(notes) for notes, _, _ in emitter.calls] == list(PATTERN)


def test_render_cycle_rejects_empty_pattern () -> None:

	"""An empty pattern cannot be rendered."""

	sequencer, _ = _make_sequencer()

	with pytest.raises(ValueError):
		sequencer.render_cycle((), 0, 40)


def test_beat_event_reports_rotation_modulo_length () -> None:

	"""Listeners receive the normalised rotation."""

	sequencer, _ = _make_sequencer()
	seen: list[int] = []

	sequencer.on_event("beat", lambda pattern, rotation, index: seen.append(rotation))
	sequencer.render_cycle(PATTERN, -1, 40)

	assert set(seen) == {11}


def test_send_failure_stops_the_cycle (clock: typing.Any, failing_out: typing.Any) -> None:

	"""After the first failed note-off nothing else is sent."""

	out = failing_out(fail_on="note_off")
	emitter = clapping.emitter.NoteEmitter(out, sleep=clock)
	sequencer = clapping.sequencer.PhaseSequencer(emitter, clapping.score.CLAPPING_MUSIC)

	with pytest.raises(clapping.errors.OutputSendError):
		sequencer.render_cycle(PATTERN, 0, 40)

	# Beat 0 pressed six notes, then the first release failed.
	assert len(out.sent) == 6
	assert all(m.type == "note_on" for m in out.sent)
	assert out.attempts == 1
	assert len(clock.sleeps) == 1


def test_closed_display_does_not_stop_the_cycle () -> None:

	"""A display writing to a broken pipe leaves every beat playing."""

	class ClosedPipe (io.StringIO):

		def write (self, text: str) -> int:
			raise BrokenPipeError

	sequencer, emitter = _make_sequencer()
	display = clapping.display.PatternDisplay(stream=ClosedPipe())

	sequencer.on_event("beat", display.show_beat)
	sequencer.render_cycle(PATTERN, 0, 40)

	assert len(emitter.calls) == 12
