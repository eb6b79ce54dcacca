
"""
clapping - a phase-shifting MIDI performance of Steve Reich's "Clapping Music".

Two voices play the same twelve-beat accent pattern. Voice A never moves;
voice B is rotated one beat further after every four cycles, walking through
every phase relationship before both voices return to unison for a short
coda with a slowed, accented ending.

Each beat is a chord: one triad when voice A accents, another when voice B
accents, both layered when they coincide, silence when neither does. Chords
go out as note-on/note-off pairs on a MIDI port opened through ``mido``.
There is no audio engine.

Run it::

    python -m clapping

Or drive the pieces directly:

    ```python
    import mido
    import clapping

    with clapping.NoteEmitter(mido.open_output("My Synth")) as emitter:
        sequencer = clapping.PhaseSequencer(emitter, clapping.CLAPPING_MUSIC)
        clapping.perform(sequencer)
    ```

Package-level exports: ``CLAPPING_MUSIC``, ``NoteEmitter``, ``PhaseSequencer``,
``Score``, ``perform``.
"""

import clapping.emitter
import clapping.performance
import clapping.score
import clapping.sequencer


CLAPPING_MUSIC = clapping.score.CLAPPING_MUSIC
NoteEmitter = clapping.emitter.NoteEmitter
PhaseSequencer = clapping.sequencer.PhaseSequencer
Score = clapping.score.Score
perform = clapping.performance.perform
