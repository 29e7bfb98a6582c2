"""Chord symbol parsing.

Turns a chord symbol such as ``"Dm7"`` or ``"Bb7#5"`` into a root pitch class
and an ordered list of intervals (semitones above the root).

The reading is deliberately forgiving:

- The root letter decides whether anything is parsed at all. An unknown
  root gives an empty `ChordData`.
- Root, third and fifth are always the first three intervals.
- Extensions (``6``, ``7``, ``9``, ``11``, ``13``) are appended in the order
  they are written. ``5`` replaces the fifth instead of appending.
- Unsupported numbers and stray characters are skipped.

Module-level constants:
- `ROOT_PITCH_CLASSES`: Maps root letters to pitch classes (0-11)
- `EXTENSION_SEMITONES`: Maps extension numbers to semitones above the root
- `MAX_INTERVALS`: Maximum number of intervals kept per chord
"""

import dataclasses
import logging
import typing


logger = logging.getLogger(__name__)


MAX_INTERVALS: int = 12

# Upper bound on extension-loop iterations for a single symbol.
DEFAULT_MAX_STEPS: int = 64

ROOT_PITCH_CLASSES: typing.Dict[str, int] = {
	"C": 0,
	"D": 2,
	"E": 4,
	"F": 5,
	"G": 7,
	"A": 9,
	"B": 11,
}

MAJOR_THIRD: int = 4
MINOR_THIRD: int = 3
PERFECT_FIFTH: int = 7
DIMINISHED_FIFTH: int = 6

FIFTH_EXTENSION: int = 5
FIFTH_INDEX: int = 2

EXTENSION_SEMITONES: typing.Dict[int, int] = {
	6: 9,
	7: 10,
	9: 14,
	11: 17,
	13: 21,
}

# Longest first, so "min" wins over "m".
_MINOR_SPELLINGS: typing.Tuple[str, ...] = ("min", "mi", "m")

_DIGITS = "0123456789"


@dataclasses.dataclass(frozen=True)
class ChordData:

	"""
	A parsed chord: root pitch class plus intervals above it.

	An empty ``intervals`` tuple means the root could not be read.
	"""

	root_offset: int = 0
	intervals: typing.Tuple[int, ...] = ()


	@property
	def num_intervals (self) -> int:

		return len(self.intervals)


	def is_empty (self) -> bool:

		"""
		Return True when the symbol's root was not recognised.
		"""

		return not self.intervals


	def notes (self) -> typing.List[int]:

		"""Return every chord tone as a semitone offset from C.

		Values are not folded into one octave, so extensions can exceed 11.

		Example:
			```python
			parse_chord_symbol("Dm7").notes()  # → [2, 5, 9, 12]
			```
		"""

		return [self.root_offset + interval for interval in self.intervals]


def _is_digit (text: str, pos: int) -> bool:

	return pos < len(text) and text[pos] in _DIGITS


def _read_modifier (text: str, pos: int) -> typing.Tuple[int, int]:

	"""Read an optional extension modifier, returning (semitones, new position)."""

	if text.startswith("b", pos):
		return -1, pos + 1

	if text.startswith("#", pos):
		return 1, pos + 1

	if text.startswith("maj", pos):
		return 1, pos + 3

	if text.startswith("M", pos):
		return 1, pos + 1

	return 0, pos


def _read_interval_number (text: str, pos: int) -> typing.Tuple[int, int]:

	"""Read one interval number starting at a digit.

	Two digits form one number only when no third digit follows, so a run
	like ``"7911"`` reads as 7, 9 and 11.
	"""

	number = int(text[pos])
	pos += 1

	if _is_digit(text, pos) and not _is_digit(text, pos + 1):
		number = number * 10 + int(text[pos])
		pos += 1

	return number, pos


def _apply_extension (intervals: typing.List[int], number: int, modifier: int) -> None:

	if number == FIFTH_EXTENSION:
		intervals[FIFTH_INDEX] = PERFECT_FIFTH + modifier
		return

	semitones = EXTENSION_SEMITONES.get(number)

	if semitones is None:
		return

	if len(intervals) >= MAX_INTERVALS:
		logger.debug(f"Dropping extension {number}: chord already has {MAX_INTERVALS} intervals")
		return

	intervals.append(semitones + modifier)


def _parse_extensions (text: str, pos: int, intervals: typing.List[int], max_steps: int) -> None:

	"""Consume modifier/number groups after the chord quality."""

	for _ in range(max_steps):

		while pos < len(text) and text[pos].isspace():
			pos += 1

		if pos >= len(text):
			return

		modifier, next_pos = _read_modifier(text, pos)

		if next_pos == pos and not _is_digit(text, pos):
			# Stray character.
			pos += 1
			continue

		pos = next_pos

		while _is_digit(text, pos):
			number, pos = _read_interval_number(text, pos)
			_apply_extension(intervals, number, modifier)

	if pos < len(text):
		logger.debug(f"Stopped reading {text!r} after {max_steps} steps at position {pos}")


def parse_chord_symbol (text: str, max_steps: int = DEFAULT_MAX_STEPS) -> ChordData:

	"""Parse a chord symbol into a root and intervals.

	Parameters:
		text: Chord symbol, e.g. ``"C"``, ``"F#m"``, ``"Bbmaj7"``, ``"G7b9"``.
		max_steps: Maximum number of extension groups (or skipped stray
			characters) read after the chord quality.

	Returns:
		A `ChordData`. If the first character is not one of ``C D E F G A B``
		the result has no intervals.

	Example:
		```python
		parse_chord_symbol("Cm7").intervals   # → (0, 3, 7, 10)
		parse_chord_symbol("C7#5").intervals  # → (0, 4, 8, 10)
		parse_chord_symbol("X").intervals     # → ()
		```
	"""

	if max_steps < 0:
		raise ValueError("max_steps must not be negative")

	pos = 0
	while pos < len(text) and (text[pos].isspace() or not text[pos].isprintable()):
		pos += 1

	if pos >= len(text) or text[pos] not in ROOT_PITCH_CLASSES:
		logger.debug(f"Invalid root note in chord {text!r}")
		return ChordData()

	root_offset = ROOT_PITCH_CLASSES[text[pos]]
	pos += 1

	if text.startswith("b", pos):
		root_offset = (root_offset - 1) % 12
		pos += 1

	elif text.startswith("#", pos):
		root_offset = (root_offset + 1) % 12
		pos += 1

	third = MAJOR_THIRD
	fifth = PERFECT_FIFTH

	if text.startswith("maj", pos):
		# Major seventh marker, read as an extension below.
		pass

	elif text.startswith("dim", pos):
		third = MINOR_THIRD
		fifth = DIMINISHED_FIFTH
		pos += 3

	else:
		for spelling in _MINOR_SPELLINGS:
			if text.startswith(spelling, pos):
				third = MINOR_THIRD
				pos += len(spelling)
				break

	intervals = [0, third, fifth]

	_parse_extensions(text, pos, intervals, max_steps)

	return ChordData(root_offset=root_offset, intervals=tuple(intervals))
