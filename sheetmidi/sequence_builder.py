"""Build a timed chord sequence from progression tokens.

Each bar is closed by ``|`` (or the end of the input). A bar written without
holds shares the time signature between its chords, giving the remainder to
the earliest chords::

	"C Dm G"  in 4  ->  C: 2, Dm: 1, G: 1

A bar that uses holds keeps exactly what was written, one beat per chord
plus one per hold::

	"C . . | G"  in 4  ->  C: 3, G: 4

`build()` is pure. It either returns a complete new `Sequence` or raises
`SequenceError`, so a caller that only swaps on success never plays a
half-built progression.
"""

import dataclasses
import logging
import typing

import sheetmidi.chords
import sheetmidi.tokens


logger = logging.getLogger(__name__)


DEFAULT_TIME_SIGNATURE: int = 4

ABORT = "abort"
DEGRADE = "degrade"
IGNORE = "ignore"
DROP = "drop"

# How each class of input problem is handled.
ERROR_POLICY: typing.Dict[str, str] = {
	"tokenization": ABORT,	# an ErrorToken anywhere rejects the whole build
	"structural": ABORT,	# a hold with no chord before it in the bar
	"root": DEGRADE,		# unknown root letter: chord kept with no intervals
	"extension": IGNORE,	# unsupported extension number or stray character
	"overflow": DROP,		# extensions past MAX_INTERVALS
}


class SequenceError (Exception):
	pass


@dataclasses.dataclass(frozen=True)
class ChordEvent:

	"""
	One chord in a built sequence.
	"""

	symbol: str
	chord: sheetmidi.chords.ChordData
	duration: int


@dataclasses.dataclass(frozen=True)
class Sequence:

	"""
	An immutable, fully built progression.
	"""

	events: typing.Tuple[ChordEvent, ...] = ()
	total_duration: int = 0
	time_signature: int = DEFAULT_TIME_SIGNATURE


	def __len__ (self) -> int:

		return len(self.events)


	def spans (self) -> typing.Iterator[typing.Tuple[int, ChordEvent]]:

		"""
		Yield ``(start_beat, event)`` pairs in order.
		"""

		start = 0

		for event in self.events:
			yield start, event
			start += event.duration


	def event_at (self, beat: int) -> typing.Optional[ChordEvent]:

		"""
		Return the event sounding at ``beat``, or None if the beat is past the end.
		"""

		for start, event in self.spans():
			if start <= beat < start + event.duration:
				return event

		return None


def validate_time_signature (value: typing.Any) -> int:

	"""Return ``value`` as a positive integer beat count.

	Integral floats such as ``4.0`` are accepted, since hosts often deliver
	every number as a float.

	Raises:
		ValueError: If the value is not a positive whole number.
	"""

	if isinstance(value, bool):
		raise ValueError(f"Time signature must be a number, got {value!r}")

	if isinstance(value, float) and value.is_integer():
		value = int(value)

	if not isinstance(value, int) or value <= 0:
		raise ValueError(f"Time signature must be a positive whole number of beats, got {value!r}")

	return value


def _close_bar (durations: typing.List[int], bar_start: int, used_holds: bool, time_signature: int) -> None:

	"""Share the time signature across the chords of a bar written without holds."""

	count = len(durations) - bar_start

	if count == 0 or used_holds:
		return

	if count > time_signature:
		logger.warning(f"Bar has {count} chords but only {time_signature} beats, {count - time_signature} will not sound")

	base, remainder = divmod(time_signature, count)

	for offset in range(count):
		durations[bar_start + offset] = base + (1 if offset < remainder else 0)


def build (
	tokens: typing.Iterable[sheetmidi.tokens.Token],
	time_signature: int = DEFAULT_TIME_SIGNATURE,
	max_steps: int = sheetmidi.chords.DEFAULT_MAX_STEPS
) -> Sequence:

	"""Build a `Sequence` from tokens.

	Parameters:
		tokens: Output of `sheetmidi.tokens.tokenize()` or `tokenize_words()`.
		time_signature: Beats per bar (the numerator; the denominator is
			always a quarter note).
		max_steps: Passed through to `parse_chord_symbol()`.

	Returns:
		A new `Sequence`.

	Raises:
		SequenceError: If the tokens contain an `ErrorToken`, or a hold
			appears before any chord in its bar.
		ValueError: If ``time_signature`` is not a positive whole number.
	"""

	time_signature = validate_time_signature(time_signature)

	symbols: typing.List[str] = []
	chords: typing.List[sheetmidi.chords.ChordData] = []
	durations: typing.List[int] = []

	bar_start = 0
	bar_uses_holds = False

	for index, token in enumerate(tokens):

		if isinstance(token, sheetmidi.tokens.ChordToken):
			symbols.append(token.text)
			chords.append(sheetmidi.chords.parse_chord_symbol(token.text, max_steps=max_steps))
			durations.append(1)

		elif isinstance(token, sheetmidi.tokens.HoldToken):

			if len(durations) == bar_start:
				raise SequenceError(f"Hold at token {index} has no chord before it in its bar")

			durations[-1] += 1
			bar_uses_holds = True

		elif isinstance(token, sheetmidi.tokens.BarToken):
			_close_bar(durations, bar_start, bar_uses_holds, time_signature)
			bar_start = len(durations)
			bar_uses_holds = False

		elif isinstance(token, sheetmidi.tokens.ErrorToken):
			raise SequenceError(f"Invalid token at position {index}: {token.reason}")

		else:
			raise SequenceError(f"Unknown token at position {index}: {token!r}")

	_close_bar(durations, bar_start, bar_uses_holds, time_signature)

	events = tuple(
		ChordEvent(symbol=symbol, chord=chord, duration=duration)
		for symbol, chord, duration in zip(symbols, chords, durations)
	)

	return Sequence(events=events, total_duration=sum(durations), time_signature=time_signature)
