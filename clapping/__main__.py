import logging
import sys

import clapping.config
import clapping.display
import clapping.emitter
import clapping.errors
import clapping.midi_utils
import clapping.performance
import clapping.score
import clapping.sequencer


logger = logging.getLogger(__name__)


def main () -> int:

	"""
	Play the piece once on the configured MIDI output.

	Returns the process exit status: 0 on completion, 1 if the output could
	not be opened or a note failed to send, 130 if interrupted.
	"""

	logging.basicConfig(level=logging.INFO)

	try:
		settings = clapping.config.settings_from_config(clapping.config.load_config())
	except (OSError, ValueError) as e:
		logger.error(f"Invalid configuration: {e}")
		return 1

	logging.getLogger().setLevel(settings.log_level)

	display = clapping.display.PatternDisplay() if settings.display else None

	if display is not None:
		display.clear()

	try:
		_, midi_out = clapping.midi_utils.open_output_by_index(settings.port_index)
	except clapping.errors.OutputOpenError as e:
		logger.error(f"Could not start: {e}")
		return 1

	with clapping.emitter.NoteEmitter(midi_out) as emitter:

		sequencer = clapping.sequencer.PhaseSequencer(emitter, clapping.score.CLAPPING_MUSIC)

		if display is not None:
			sequencer.on_event("beat", display.show_beat)

		try:
			clapping.performance.perform(sequencer)

		except clapping.errors.OutputSendError as e:
			logger.error(f"Performance aborted: {e}")
			return 1

		except KeyboardInterrupt:
			logger.info("Stopping...")
			emitter.panic()
			return 130

	return 0


if __name__ == "__main__":
	sys.exit(main())
