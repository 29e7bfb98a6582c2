"""Playback cursor over a built `Sequence`.

The transport counts beats. It does not keep time itself: a host calls
`tick()` once per beat and asks for notes between ticks.
"""

import random
import typing

import sheetmidi.chords
import sheetmidi.sequence_builder


class Transport:

	"""
	A beat cursor with note queries against the chord under it.

	The cursor survives sequence swaps. When a shorter sequence replaces a
	longer one the cursor can point past the end; the next lookup notices
	and restarts from beat 0.
	"""

	def __init__ (
		self,
		sequence: typing.Optional[sheetmidi.sequence_builder.Sequence] = None,
		rng: typing.Optional[random.Random] = None
	) -> None:

		"""
		Parameters:
			sequence: Initial sequence (default: empty).
			rng: Random source for `random_note()`. Pass a seeded
				``random.Random`` for repeatable output.
		"""

		self.sequence = sequence if sequence is not None else sheetmidi.sequence_builder.Sequence()
		self.rng = rng if rng is not None else random.Random()
		self.current_beat = 0


	def load (self, sequence: sheetmidi.sequence_builder.Sequence) -> None:

		"""Swap in a new sequence, leaving the cursor where it is."""

		self.sequence = sequence


	def current_event (self) -> typing.Optional[sheetmidi.sequence_builder.ChordEvent]:

		"""
		Return the event under the cursor, or None for an empty sequence.
		"""

		event = self.sequence.event_at(self.current_beat)

		if event is None and self.sequence.events:
			self.current_beat = 0
			event = self.sequence.event_at(self.current_beat)

		return event


	def tick (self) -> int:

		"""Advance one beat, wrapping to 0 at the end. Returns the new beat."""

		self.current_beat += 1

		if self.current_beat >= self.sequence.total_duration:
			self.current_beat = 0

		return self.current_beat


	def seek (self, beat: int) -> int:

		"""Move to ``beat``, wrapping into range. Negative beats count from the end.

		Does nothing while the sequence is empty.
		"""

		total = self.sequence.total_duration

		if total > 0:
			# Python's modulo already takes the sign of the divisor.
			self.current_beat = int(beat) % total

		return self.current_beat


	def _chord (self) -> typing.Optional[sheetmidi.chords.ChordData]:

		event = self.current_event()

		return event.chord if event is not None else None


	def _interval (self, index: int) -> typing.Optional[int]:

		chord = self._chord()

		if chord is None or chord.num_intervals <= index:
			return None

		return chord.root_offset + chord.intervals[index]


	def root (self) -> typing.Optional[int]:

		"""Return the root of the current chord as a semitone offset from C.

		A chord whose symbol could not be read still reports its root offset.
		"""

		chord = self._chord()

		if chord is None:
			return None

		if chord.is_empty():
			return chord.root_offset

		return chord.root_offset + chord.intervals[0]


	def third (self) -> typing.Optional[int]:

		return self._interval(1)


	def fifth (self) -> typing.Optional[int]:

		return self._interval(2)


	def random_note (self) -> typing.Optional[int]:

		"""
		Return a uniformly chosen tone of the current chord.
		"""

		chord = self._chord()

		if chord is None:
			return None

		if chord.is_empty():
			return chord.root_offset

		return chord.root_offset + chord.intervals[self.rng.randrange(chord.num_intervals)]
