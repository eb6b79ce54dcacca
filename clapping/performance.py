"""The full arc of the piece.

For every phase offset the two voices play four cycles; then they return to
unison for a short coda whose final cycle slows and accents its last two
beats. With the 12-beat pattern that is 48 phasing cycles plus 4 coda cycles.
"""

import dataclasses
import logging
import typing

import clapping.constants
import clapping.score
import clapping.sequencer


logger = logging.getLogger(__name__)


@dataclasses.dataclass (frozen=True)
class Cycle:

	"""One planned call to ``PhaseSequencer.render_cycle``."""

	rotation: int
	velocity: int
	is_final: bool = False


def performance_plan (score: clapping.score.Score) -> typing.Iterator[Cycle]:

	"""Yield every cycle of the performance in playing order."""

	for rotation in range(score.length):
		for _ in range(clapping.constants.PHASE_REPEATS):
			yield Cycle(rotation=rotation, velocity=clapping.constants.PHASE_VELOCITY)

	for _ in range(clapping.constants.CODA_REPEATS):
		yield Cycle(rotation=0, velocity=clapping.constants.CODA_VELOCITY)

	yield Cycle(rotation=0, velocity=clapping.constants.FINAL_VELOCITY, is_final=True)


def perform (sequencer: clapping.sequencer.PhaseSequencer) -> None:

	"""
	Play the whole piece from the sequencer's score, one cycle after another.

	Stops at the first failure; the exception propagates to the caller and no
	further cycles are played.
	"""

	score = sequencer.score

	previous_rotation: typing.Optional[int] = None

	for cycle in performance_plan(score):

		if cycle.rotation != previous_rotation:
			logger.info(f"Phase {cycle.rotation}/{score.length - 1} at velocity {cycle.velocity}")
			previous_rotation = cycle.rotation

		if cycle.is_final:
			logger.info("Final cycle")

		sequencer.render_cycle(score.pattern, cycle.rotation, cycle.velocity, cycle.is_final)

	logger.info("Performance complete")
