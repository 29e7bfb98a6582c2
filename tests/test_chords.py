import pytest

import sheetmidi.chords


def test_root_table () -> None:

	"""Each natural root letter maps to its pitch class, the same way every time."""

	expected = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}

	for letter, pc in expected.items():
		first = sheetmidi.chords.parse_chord_symbol(letter)
		assert first.root_offset == pc
		assert sheetmidi.chords.parse_chord_symbol(letter) == first


def test_root_accidentals () -> None:

	"""A single flat or sharp shifts the root, wrapping around the octave."""

	assert sheetmidi.chords.parse_chord_symbol("Bb").root_offset == 10
	assert sheetmidi.chords.parse_chord_symbol("F#m").root_offset == 6
	assert sheetmidi.chords.parse_chord_symbol("Cb").root_offset == 11
	assert sheetmidi.chords.parse_chord_symbol("B#").root_offset == 0


@pytest.mark.parametrize("symbol, intervals", [
	("C", (0, 4, 7)),
	("Cm", (0, 3, 7)),
	("Cm7", (0, 3, 7, 10)),
	("Cmin7", (0, 3, 7, 10)),
	("Cmi7", (0, 3, 7, 10)),
	("Cdim", (0, 3, 6)),
	("Cdim7", (0, 3, 6, 10)),
	("Cmaj7", (0, 4, 7, 11)),
	("CM7", (0, 4, 7, 11)),
	("CmM7", (0, 3, 7, 11)),
	("C6", (0, 4, 7, 9)),
	("C11", (0, 4, 7, 17)),
	("C13", (0, 4, 7, 21)),
	("G7b9", (0, 4, 7, 10, 13)),
	("C7#9", (0, 4, 7, 10, 15)),
	("Cadd9", (0, 4, 7, 14)),
	("Csus4", (0, 4, 7)),
])
def test_chord_intervals (symbol: str, intervals: tuple) -> None:

	"""Qualities and extensions produce the expected interval lists."""

	assert sheetmidi.chords.parse_chord_symbol(symbol).intervals == intervals


def test_fifth_extension_overwrites () -> None:

	"""An explicit 5 replaces the fifth rather than adding a tone."""

	assert sheetmidi.chords.parse_chord_symbol("C7#5").intervals == (0, 4, 8, 10)
	assert sheetmidi.chords.parse_chord_symbol("C7b5").intervals == (0, 4, 6, 10)
	assert sheetmidi.chords.parse_chord_symbol("C5").intervals == (0, 4, 7)


def test_digit_run_splits_into_extensions () -> None:

	"""A run of digits reads as separate extensions when no number fits it whole."""

	assert sheetmidi.chords.parse_chord_symbol("C7911").intervals == (0, 4, 7, 10, 14, 17)


def test_unknown_root_is_empty () -> None:

	"""An unrecognised root letter gives a chord with no intervals."""

	chord = sheetmidi.chords.parse_chord_symbol("X")

	assert chord.num_intervals == 0
	assert chord.is_empty()
	assert chord.root_offset == 0

	assert sheetmidi.chords.parse_chord_symbol("").is_empty()
	assert sheetmidi.chords.parse_chord_symbol("cm7").is_empty()


def test_leading_whitespace_ignored () -> None:

	"""Whitespace before the root is skipped."""

	assert sheetmidi.chords.parse_chord_symbol("  Dm").root_offset == 2


def test_interval_cap () -> None:

	"""Extensions past the cap are dropped silently."""

	chord = sheetmidi.chords.parse_chord_symbol("C" + " 7" * 20)

	assert chord.num_intervals == sheetmidi.chords.MAX_INTERVALS
	assert chord.intervals[:3] == (0, 4, 7)
	assert set(chord.intervals[3:]) == {10}


def test_max_steps_bounds_extension_reading () -> None:

	"""Reading stops after max_steps groups or skipped characters."""

	assert sheetmidi.chords.parse_chord_symbol("C9", max_steps=0).intervals == (0, 4, 7)
	assert sheetmidi.chords.parse_chord_symbol("Cxxxx9", max_steps=3).intervals == (0, 4, 7)
	assert sheetmidi.chords.parse_chord_symbol("Cxxxx9", max_steps=5).intervals == (0, 4, 7, 14)


def test_max_steps_negative () -> None:

	"""A negative bound is rejected."""

	with pytest.raises(ValueError):
		sheetmidi.chords.parse_chord_symbol("C", max_steps=-1)


def test_notes () -> None:

	"""notes() adds the root offset to every interval without folding."""

	assert sheetmidi.chords.parse_chord_symbol("Dm7").notes() == [2, 5, 9, 12]
	assert sheetmidi.chords.parse_chord_symbol("X").notes() == []
