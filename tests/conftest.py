import typing

import mido
import pytest


class FakeMidiOut:

	"""MIDI output stub that records every message sent to it."""

	def __init__ (self) -> None:

		self.sent: typing.List[mido.Message] = []
		self.closed = False

	def send (self, message: mido.Message) -> None:

		"""Record the outgoing MIDI message."""

		self.sent.append(message)

	def close (self) -> None:

		"""Mark the fake device closed."""

		self.closed = True


class FailingMidiOut (FakeMidiOut):

	"""MIDI output stub that raises on a chosen message type after a number of successful sends."""

	def __init__ (self, fail_on: str = "note_off", after: int = 0) -> None:

		super().__init__()
		self.fail_on = fail_on
		self.after = after
		self.attempts = 0

	def send (self, message: mido.Message) -> None:

		"""Raise once the failing message type has been seen ``after`` times."""

		if message.type == self.fail_on:
			if self.attempts >= self.after:
				self.attempts += 1
				raise OSError("device disconnected")
			self.attempts += 1

		super().send(message)


class FakeClock:

	"""Stand-in for ``time.sleep`` that records the requested durations."""

	def __init__ (self) -> None:

		self.sleeps: typing.List[float] = []

	def __call__ (self, seconds: float) -> None:

		self.sleeps.append(seconds)


_fake_outputs: typing.List[FakeMidiOut] = []


def _fake_get_output_names () -> list[str]:

	"""Return a fixed list of MIDI output names for tests."""

	return ["Dummy MIDI 0", "Dummy MIDI 1"]


def _fake_open_output (name: str) -> FakeMidiOut:

	"""Return a fake MIDI output regardless of the name."""

	fake = FakeMidiOut()
	_fake_outputs.append(fake)
	return fake


@pytest.fixture
def patch_midi (monkeypatch: pytest.MonkeyPatch) -> typing.List[FakeMidiOut]:

	"""Patch mido to use fake MIDI outputs. Returns the list of ports opened during the test."""

	_fake_outputs.clear()
	monkeypatch.setattr(mido, "get_output_names", _fake_get_output_names)
	monkeypatch.setattr(mido, "open_output", _fake_open_output)
	return _fake_outputs


@pytest.fixture
def fake_out () -> FakeMidiOut:

	"""A fresh recording MIDI output."""

	return FakeMidiOut()


@pytest.fixture
def clock () -> FakeClock:

	"""A sleep replacement that never blocks."""

	return FakeClock()


@pytest.fixture
def failing_out () -> typing.Callable[..., FailingMidiOut]:

	"""Factory for outputs that fail on a chosen message type."""

	return FailingMidiOut
