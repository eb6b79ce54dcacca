import logging
import typing

import mido

import clapping.errors


logger = logging.getLogger(__name__)


def list_output_names () -> typing.List[str]:

	"""Return the names of the available MIDI output ports.

	Raises:
		OutputOpenError: If the MIDI backend cannot be queried.
	"""

	try:
		outputs = mido.get_output_names()
	except Exception as e:
		raise clapping.errors.OutputOpenError(f"Could not list MIDI outputs: {e}") from e

	logger.info(f"Available MIDI outputs: {outputs}")

	return list(outputs)


def open_output_by_index (index: int) -> typing.Tuple[str, typing.Any]:

	"""
	Open the MIDI output port at position ``index`` in the backend's port list.

	The port list is the one ``mido.get_output_names()`` returns, so the same
	index selects the same destination as long as the set of connected
	devices does not change.

	Returns:
		A tuple of (port_name, midi_out_object).

	Raises:
		OutputOpenError: If there are no outputs, the index is out of range, or
			the backend fails to open the port.
	"""

	outputs = list_output_names()

	if not outputs:
		raise clapping.errors.OutputOpenError("No MIDI output devices found")

	if not 0 <= index < len(outputs):
		raise clapping.errors.OutputOpenError(
			f"MIDI output index {index} is out of range. "
			f"Available devices: {', '.join(f'{i}: {name}' for i, name in enumerate(outputs))}"
		)

	name = outputs[index]

	try:
		midi_out = mido.open_output(name)
	except Exception as e:
		raise clapping.errors.OutputOpenError(f"Failed to open MIDI output '{name}': {e}") from e

	logger.info(f"Opened MIDI output {index}: {name}")

	return name, midi_out
