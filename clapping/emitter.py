import logging
import time
import types
import typing

import mido

import clapping.constants
import clapping.errors
import clapping.pitch


logger = logging.getLogger(__name__)


class NoteEmitter:

	"""
	Turns sets of pitches into timed note-on/note-off pairs on one MIDI port.

	The emitter owns the port for the lifetime of the performance and is the
	only thing that writes to it. Every chord is pressed, held by blocking the
	calling thread, then released. Send failures are fatal: they are raised as
	``OutputSendError`` and nothing is retried.
	"""

	def __init__ (
		self,
		midi_out: typing.Any,
		channel: int = clapping.constants.MIDI_CHANNEL,
		sleep: typing.Optional[typing.Callable[[float], typing.Any]] = None
	) -> None:

		"""Wrap an opened output port.

		Parameters:
			midi_out: An opened port, anything with ``send(mido.Message)`` and ``close()``.
			channel: MIDI channel (0-15) for every message.
			sleep: Blocking sleep taking seconds. Defaults to ``time.sleep``.
		"""

		if not 0 <= channel <= 15:
			raise ValueError(f"MIDI channel must be 0-15, got {channel}")

		self.midi_out = midi_out
		self.channel = channel
		self._sleep = sleep if sleep is not None else time.sleep
		self._closed = False
		self.active_notes: typing.Set[int] = set()

	def __enter__ (self) -> "NoteEmitter":

		return self

	def __exit__ (
		self,
		exc_type: typing.Optional[typing.Type[BaseException]],
		exc: typing.Optional[BaseException],
		tb: typing.Optional[types.TracebackType]
	) -> None:

		self.close()

	def play (self, notes: typing.Sequence[clapping.pitch.Note], velocity: int, duration_ms: int) -> None:

		"""Sound a chord for ``duration_ms`` milliseconds.

		An empty ``notes`` sequence is a rest: the call still blocks for the
		full duration. Otherwise every note is pressed, the hold elapses, then
		every note is released with the same velocity.

		Raises:
			ValueError: For an out-of-range velocity or pitch, or a negative duration.
			OutputSendError: If the port rejects any message.
		"""

		if not clapping.constants.MIN_VELOCITY <= velocity <= clapping.constants.MAX_VELOCITY:
			raise ValueError(f"Velocity must be 0-127, got {velocity}")

		if duration_ms < 0:
			raise ValueError(f"Duration cannot be negative, got {duration_ms}")

		if not notes:
			self._sleep(duration_ms / 1000)
			return

		numbers = [clapping.pitch.note_number(letter, octave) for letter, octave in notes]

		logger.debug(f"Chord {numbers} velocity={velocity} for {duration_ms} ms")

		self.press(numbers, velocity)
		self._sleep(duration_ms / 1000)
		self.release(numbers, velocity)

	def press (self, numbers: typing.Iterable[int], velocity: int) -> None:

		"""Send note-on for every note number."""

		for note in numbers:
			self._send(mido.Message('note_on', channel=self.channel, note=note, velocity=velocity))
			self.active_notes.add(note)

	def release (self, numbers: typing.Iterable[int], velocity: int) -> None:

		"""Send note-off for every note number."""

		for note in numbers:
			self._send(mido.Message('note_off', channel=self.channel, note=note, velocity=velocity))
			self.active_notes.discard(note)

	def panic (self) -> None:

		"""
		Release every note that is still sounding.

		Meant for an operator interrupt during a hold. Failures here are logged
		rather than raised so the remaining notes still get their note-off.
		"""

		if not self.active_notes:
			return

		logger.info(f"Panic: releasing {len(self.active_notes)} held notes.")

		for note in sorted(self.active_notes):
			try:
				self.midi_out.send(mido.Message('note_off', channel=self.channel, note=note, velocity=0))
			except Exception:
				logger.exception(f"Failed to release note {note} (device may be disconnected)")

		self.active_notes.clear()

	def close (self) -> None:

		"""Close the output port. Safe to call more than once."""

		if self._closed:
			return

		self._closed = True
		self.midi_out.close()
		logger.info("MIDI output closed")

	def _send (self, message: mido.Message) -> None:

		try:
			self.midi_out.send(message)
		except Exception as e:
			raise clapping.errors.OutputSendError(message, str(e)) from e
