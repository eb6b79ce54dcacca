"""Fixed MIDI and timing constants for the performance.

Everything here is immutable. The pattern and triads live in
``clapping.score``; this module only holds the protocol-level numbers and the
hold durations used by the sequencer.
"""

# MIDI channel (0-indexed). The whole piece plays on one channel.
MIDI_CHANNEL = 0

# MIDI standard ranges
MIN_NOTE = 0
MAX_NOTE = 127
MIN_VELOCITY = 0
MAX_VELOCITY = 127

# Hold durations (milliseconds)
BEAT_DURATION_MS = 200
FINAL_BEAT_DURATION_MS = 1000

# Number of beats at the end of the final cycle that are slowed and accented.
FINAL_BEAT_COUNT = 2
FINAL_VELOCITY_BOOST = 10

# Performance dynamics
PHASE_REPEATS = 4
PHASE_VELOCITY = 40
CODA_REPEATS = 3
CODA_VELOCITY = 50
FINAL_VELOCITY = 60

# Output destination used when no configuration says otherwise.
DEFAULT_PORT_INDEX = 1
