import random

import sheetmidi.sequence_builder
import sheetmidi.tokens
import sheetmidi.transport


def _transport (text: str, time_signature: int = 4, seed: int = 1) -> sheetmidi.transport.Transport:

	sequence = sheetmidi.sequence_builder.build(sheetmidi.tokens.tokenize(text), time_signature)

	return sheetmidi.transport.Transport(sequence, rng=random.Random(seed))


def test_empty_transport () -> None:

	"""With no events there is no current chord and every query is None."""

	transport = sheetmidi.transport.Transport()

	assert transport.current_event() is None
	assert transport.root() is None
	assert transport.third() is None
	assert transport.fifth() is None
	assert transport.random_note() is None


def test_tick_is_cyclical () -> None:

	"""Ticking total_duration times returns to the starting beat."""

	transport = _transport("C Dm G | F . . .")
	total = transport.sequence.total_duration

	assert total == 8

	transport.seek(3)

	for _ in range(total):
		transport.tick()

	assert transport.current_beat == 3


def test_tick_wraps () -> None:

	"""The beat after the last one is 0."""

	transport = _transport("C G")
	transport.seek(3)

	assert transport.tick() == 0


def test_tick_on_empty_sequence () -> None:

	"""Ticking an empty sequence stays at 0."""

	transport = sheetmidi.transport.Transport()

	assert transport.tick() == 0
	assert transport.tick() == 0


def test_seek_wraps_negative () -> None:

	"""seek(-1) on a five-beat sequence lands on beat 4."""

	transport = _transport("C . . . . ")

	assert transport.sequence.total_duration == 5
	assert transport.seek(-1) == 4
	assert transport.seek(-6) == 4
	assert transport.seek(12) == 2


def test_seek_on_empty_sequence_is_noop () -> None:

	"""Seeking with no events leaves the cursor alone."""

	transport = sheetmidi.transport.Transport()

	assert transport.seek(7) == 0


def test_current_event_follows_beat () -> None:

	"""The current event is the one whose span covers the cursor."""

	transport = _transport("C Dm G")
	symbols = []

	for _ in range(4):
		symbols.append(transport.current_event().symbol)
		transport.tick()

	assert symbols == ["C", "C", "Dm", "G"]


def test_stale_cursor_resets () -> None:

	"""A cursor past the end of a newly loaded shorter sequence restarts at 0."""

	transport = _transport("C | G | Am | F")
	transport.seek(14)

	shorter = sheetmidi.sequence_builder.build(sheetmidi.tokens.tokenize("Dm7 G7"), 4)
	transport.load(shorter)

	assert transport.current_beat == 14
	assert transport.current_event().symbol == "Dm7"
	assert transport.current_beat == 0


def test_note_queries () -> None:

	"""Root, third and fifth add the root offset to the matching interval."""

	transport = _transport("Dm7")

	assert transport.root() == 2
	assert transport.third() == 5
	assert transport.fifth() == 9


def test_queries_on_empty_chord () -> None:

	"""A chord with no intervals reports its root offset and nothing else."""

	transport = _transport("X")

	assert transport.root() == 0
	assert transport.third() is None
	assert transport.fifth() is None

	for _ in range(20):
		assert transport.random_note() == 0


def test_random_note_picks_chord_tones () -> None:

	"""random_note() only returns tones of the current chord and reaches all of them."""

	transport = _transport("G7")
	seen = {transport.random_note() for _ in range(200)}

	assert seen == {7, 11, 14, 17}


def test_random_note_is_repeatable_with_seed () -> None:

	"""The same seed gives the same notes."""

	first = _transport("Cmaj7", seed=42)
	second = _transport("Cmaj7", seed=42)

	assert [first.random_note() for _ in range(10)] == [second.random_note() for _ in range(10)]
