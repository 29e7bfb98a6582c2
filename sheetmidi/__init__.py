"""
SheetMidi - chord-chart notation to a beat-stepped harmonic sequence.

Write a progression the way it looks on a lead sheet and play it back one
beat at a time:

    C | Am | Dm7 . G7 . | Cmaj7

- **Chord symbols.** Roots ``C``-``B`` with ``b``/``#``, ``m``/``min``/``dim``
  qualities, and ``5``/``6``/``7``/``9``/``11``/``13`` extensions with
  ``b``, ``#`` or ``maj`` alterations.
- **Bars.** ``|`` closes a bar. Chords in a bar share its beats evenly,
  with any remainder going to the earliest chords.
- **Holds.** ``.`` extends the previous chord by one beat. A bar that uses
  holds is timed exactly as written.
- **Transport.** ``tick()``, ``seek()`` and ``root()``, ``third()``,
  ``fifth()``, ``random_note()`` queries against the chord under the cursor.
- **OSC bridge.** ``sheetmidi.osc.OscServer`` exposes an engine to any host
  that speaks OSC.

Minimal example:

    ```python
    import sheetmidi

    engine = sheetmidi.SheetMidi(time_signature=4)
    engine.set_text("C | Dm7 . G7 . | C")

    for _ in range(12):
        print(engine.current_symbol(), 60 + engine.root())
        engine.tick()
    ```

Package-level exports: ``SheetMidi``, ``Transport``, ``build``, ``tokenize``,
``parse_chord_symbol``.
"""

import sheetmidi.chords
import sheetmidi.engine
import sheetmidi.sequence_builder
import sheetmidi.tokens
import sheetmidi.transport


SheetMidi = sheetmidi.engine.SheetMidi
Transport = sheetmidi.transport.Transport
build = sheetmidi.sequence_builder.build
tokenize = sheetmidi.tokens.tokenize
parse_chord_symbol = sheetmidi.chords.parse_chord_symbol
