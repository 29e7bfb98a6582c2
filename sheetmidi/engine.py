"""The host-facing SheetMidi engine.

One `SheetMidi` instance owns one progression and one playback cursor.
Hosts feed it text or word batches, change the time signature, tick it once
per beat and ask for notes. Results are returned and also emitted on
``engine.events``:

- ``"chord"`` (str): the active chord symbol, after every note query, tick
  and successful rebuild.
- ``"note"`` (int): the result of a note query, as an unclamped semitone
  offset from C. The host folds it into its own octave range.
- ``"beat"`` (int): the cursor position, after every tick, seek and
  successful rebuild.

Example:
	```python
	engine = sheetmidi.SheetMidi(time_signature=4)
	engine.events.on("note", lambda note: print(60 + note))

	engine.set_text("C | Dm7 . | G7")
	engine.root()   # → 0, prints 60
	engine.tick()
	engine.third()  # → 4
	```
"""

import logging
import random
import typing

import sheetmidi.chords
import sheetmidi.event_emitter
import sheetmidi.sequence_builder
import sheetmidi.tokens
import sheetmidi.transport


logger = logging.getLogger(__name__)


class SheetMidi:

	"""
	A chord progression with a beat cursor.

	Rebuilds are atomic. A progression that fails to build is logged and
	ignored: the previous sequence, time signature and cursor stay as they
	were.
	"""

	def __init__ (
		self,
		time_signature: int = sheetmidi.sequence_builder.DEFAULT_TIME_SIGNATURE,
		debug: bool = False,
		rng: typing.Optional[random.Random] = None,
		max_steps: int = sheetmidi.chords.DEFAULT_MAX_STEPS
	) -> None:

		"""
		Parameters:
			time_signature: Beats per bar.
			debug: Log every parsed chord after each rebuild.
			rng: Random source for `random_note()`.
			max_steps: Extension-parsing bound per chord symbol.
		"""

		self.time_signature = sheetmidi.sequence_builder.validate_time_signature(time_signature)
		self.debug = debug
		self.max_steps = max_steps

		self.events = sheetmidi.event_emitter.EventEmitter()
		self.transport = sheetmidi.transport.Transport(rng=rng)

		# Tokens of the last successful build, reused when only the time signature changes.
		self._tokens: typing.Tuple[sheetmidi.tokens.Token, ...] = ()


	@property
	def sequence (self) -> sheetmidi.sequence_builder.Sequence:

		return self.transport.sequence


	@property
	def current_beat (self) -> int:

		return self.transport.current_beat


	def set_text (self, text: typing.Union[str, bytes]) -> bool:

		"""Replace the progression with one written as free text.

		Returns:
			True if the new progression was built and swapped in.
		"""

		return self._rebuild(sheetmidi.tokens.tokenize(text), self.time_signature)


	def set_words (self, words: typing.Iterable[typing.Any]) -> bool:

		"""Replace the progression with a batch of host words (one token each).

		Returns:
			True if the new progression was built and swapped in.
		"""

		return self._rebuild(sheetmidi.tokens.tokenize_words(words), self.time_signature)


	def set_time_signature (self, value: typing.Any) -> bool:

		"""Change the beats per bar and rebuild the current progression.

		Raises:
			ValueError: If ``value`` is not a positive whole number.
		"""

		time_signature = sheetmidi.sequence_builder.validate_time_signature(value)

		return self._rebuild(self._tokens, time_signature)


	def set_debug (self, enabled: bool) -> None:

		self.debug = bool(enabled)
		logger.info(f"Debug output {'enabled' if self.debug else 'disabled'}")


	def _rebuild (self, tokens: typing.Iterable[sheetmidi.tokens.Token], time_signature: int) -> bool:

		tokens = tuple(tokens)

		try:
			sequence = sheetmidi.sequence_builder.build(tokens, time_signature, max_steps=self.max_steps)
		except sheetmidi.sequence_builder.SequenceError as exc:
			logger.warning(f"Progression rejected, keeping the previous one: {exc}")
			return False

		self._tokens = tokens
		self.time_signature = time_signature
		self.transport.load(sequence)

		if self.debug:
			for start, event in sequence.spans():
				logger.info(
					f"Beat {start}: {event.symbol} root {event.chord.root_offset} "
					f"intervals {list(event.chord.intervals)} for {event.duration} beats"
				)

		self._emit_chord()
		self.events.emit("beat", self.transport.current_beat)

		return True


	def _emit_chord (self) -> None:

		event = self.transport.current_event()

		if event is not None:
			self.events.emit("chord", event.symbol)


	def _emit_note (self, note: typing.Optional[int]) -> typing.Optional[int]:

		self._emit_chord()

		if note is not None:
			self.events.emit("note", note)

		return note


	def current_symbol (self) -> typing.Optional[str]:

		"""
		Return the active chord symbol, or None if there is no progression.
		"""

		event = self.transport.current_event()

		return event.symbol if event is not None else None


	def tick (self) -> int:

		"""
		Advance one beat and return the new position.
		"""

		beat = self.transport.tick()

		self._emit_chord()
		self.events.emit("beat", beat)

		return beat


	def seek (self, beat: int) -> int:

		"""
		Jump to ``beat`` (wrapped into range) and return the new position.
		"""

		position = self.transport.seek(beat)

		self.events.emit("beat", position)

		return position


	def root (self) -> typing.Optional[int]:

		return self._emit_note(self.transport.root())


	def third (self) -> typing.Optional[int]:

		return self._emit_note(self.transport.third())


	def fifth (self) -> typing.Optional[int]:

		return self._emit_note(self.transport.fifth())


	def random_note (self) -> typing.Optional[int]:

		return self._emit_note(self.transport.random_note())


	def describe (self) -> typing.List[str]:

		"""Log and return a summary of the stored progression.

		Example:
			```python
			engine.set_text("C G")
			engine.describe()
			# ['Current progression (2 chords, 4 beats in 4/4):',
			#  '  Chord 1: C (2 beats)',
			#  '  Chord 2: G (2 beats)']
			```
		"""

		sequence = self.transport.sequence

		if not sequence.events:
			lines = ["No chords stored"]

		else:
			lines = [
				f"Current progression ({len(sequence)} chords, "
				f"{sequence.total_duration} beats in {sequence.time_signature}/4):"
			]

			for number, event in enumerate(sequence.events, start=1):
				beats = "beat" if event.duration == 1 else "beats"
				lines.append(f"  Chord {number}: {event.symbol} ({event.duration} {beats})")

		logger.info("\n".join(lines))

		return lines
