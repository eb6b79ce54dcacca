import typing

import mido


class PerformanceError (Exception):

	"""Base class for failures that end a performance."""


class OutputOpenError (PerformanceError):

	"""The MIDI output destination could not be opened, so the performance never started."""


class OutputSendError (PerformanceError):

	"""A note event could not be delivered and the performance was aborted mid-way.

	The message that failed is kept on ``message`` so the top level can report it.
	"""

	def __init__ (self, message: mido.Message, reason: typing.Optional[str] = None) -> None:

		self.message = message

		text = f"Failed to send {message.type} note={message.note} velocity={message.velocity}"

		if reason:
			text = f"{text}: {reason}"

		super().__init__(text)
