"""Tokenizer for chord-progression text.

Progressions are written as whitespace-separated words:

- A chord symbol such as ``C``, ``Dm7`` or ``Bb7#5``.
- ``.`` holds the previous chord for one more beat.
- ``|`` closes a bar.

``"C | Dm7 . | G7"`` tokenizes to ``Chord("C")``, ``Bar``, ``Chord("Dm7")``,
``Hold``, ``Bar``, ``Chord("G7")``.
"""

import dataclasses
import logging
import typing


logger = logging.getLogger(__name__)


HOLD_SYMBOL: str = "."
BAR_SYMBOL: str = "|"


@dataclasses.dataclass(frozen=True)
class ChordToken:

	"""A chord symbol, kept as written."""

	text: str


@dataclasses.dataclass(frozen=True)
class HoldToken:

	"""Extends the previous chord in the bar by one beat."""


@dataclasses.dataclass(frozen=True)
class BarToken:

	"""Marks the end of a bar."""


@dataclasses.dataclass(frozen=True)
class ErrorToken:

	"""An input element that could not be read as text."""

	reason: str = ""


Token = typing.Union[ChordToken, HoldToken, BarToken, ErrorToken]


def _skippable (char: str) -> bool:

	return char.isspace() or not char.isprintable()


def _word_token (word: str) -> Token:

	"""Classify a single non-empty word."""

	if word == HOLD_SYMBOL:
		return HoldToken()

	if word == BAR_SYMBOL:
		return BarToken()

	return ChordToken(word)


def _flush (run: typing.List[str], tokens: typing.List[Token]) -> None:

	"""Emit the pending run as a token (if it holds anything) and clear it."""

	word = "".join(run).strip()
	run.clear()

	if word:
		tokens.append(_word_token(word))


def tokenize (text: typing.Union[str, bytes]) -> typing.List[Token]:

	"""Split free text into progression tokens.

	A leading byte-order mark and any leading whitespace or non-printable
	characters are skipped. Whitespace closes the current word, ``|`` closes
	the current word and emits a bar token of its own, and non-printable
	characters inside a word are dropped.

	Parameters:
		text: The progression text. ``bytes`` are decoded as UTF-8.

	Returns:
		Tokens in input order. Input that cannot be read as text produces a
		single `ErrorToken`.

	Example:
		```python
		tokenize("C . | G")
		# [ChordToken("C"), HoldToken(), BarToken(), ChordToken("G")]
		```
	"""

	if isinstance(text, bytes):
		try:
			text = text.decode("utf-8")
		except UnicodeDecodeError as exc:
			logger.warning(f"Chord text is not valid UTF-8: {exc}")
			return [ErrorToken(f"undecodable text: {exc.reason}")]

	if not isinstance(text, str):
		return [ErrorToken(f"expected text, got {type(text).__name__}")]

	start = 0
	while start < len(text) and _skippable(text[start]):
		start += 1

	tokens: typing.List[Token] = []
	run: typing.List[str] = []

	for char in text[start:]:

		if char == BAR_SYMBOL:
			_flush(run, tokens)
			tokens.append(BarToken())

		elif char.isspace():
			_flush(run, tokens)

		elif char.isprintable():
			run.append(char)

	_flush(run, tokens)

	return tokens


def tokenize_words (words: typing.Iterable[typing.Any]) -> typing.List[Token]:

	"""Convert a batch of host words into tokens, one token per word.

	This is the path for hosts that deliver a progression already split into
	words (an OSC argument list, for example). Each string maps to a hold,
	bar or chord token. Anything that is not text, such as a number, becomes
	an `ErrorToken`. Empty words are skipped.
	"""

	tokens: typing.List[Token] = []

	for index, word in enumerate(words):

		if isinstance(word, bytes):
			try:
				word = word.decode("utf-8")
			except UnicodeDecodeError:
				tokens.append(ErrorToken(f"word {index} is not valid UTF-8"))
				continue

		if not isinstance(word, str):
			logger.warning(f"Got non-text word at position {index}: {word!r}")
			tokens.append(ErrorToken(f"word {index} is {type(word).__name__}, not text"))
			continue

		word = word.strip()

		if word:
			tokens.append(_word_token(word))

	return tokens
