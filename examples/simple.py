import logging
import random

import sheetmidi

logging.basicConfig(level=logging.INFO)

# Middle C. Note values from the engine are semitones above C, so the host
# decides the octave.
BASE_NOTE = 60

engine = sheetmidi.SheetMidi(time_signature=4, rng=random.Random(1))

# Print every chord change as it happens.
last_chord = []

def on_chord (symbol):
	if not last_chord or last_chord[-1] != symbol:
		print(f"-- {symbol}")
	last_chord.append(symbol)

engine.events.on("chord", on_chord)

# Two bars of ii-V, then a bar of the tonic held with dots.
engine.set_text("Dm7 G7 | Dm9 . G13 . | Cmaj7 . . .")
engine.describe()

for _ in range(engine.sequence.total_duration):
	bass = BASE_NOTE - 24 + engine.root()
	lead = BASE_NOTE + engine.random_note()
	print(f"beat {engine.current_beat}: bass {bass} lead {lead}")
	engine.tick()

# Same chords in 3/4 without retyping them.
engine.set_time_signature(3)
engine.describe()
