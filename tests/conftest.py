import random
import typing

import pytest

import sheetmidi.engine


class FakeOscClient:

	"""Records outgoing OSC messages instead of sending them."""

	def __init__ (self) -> None:

		self.messages: typing.List[typing.Tuple[str, typing.Any]] = []


	def send_message (self, address: str, value: typing.Any) -> None:

		"""Store the message."""

		self.messages.append((address, value))


	def addresses (self) -> typing.List[str]:

		"""Return just the addresses, in send order."""

		return [address for address, _ in self.messages]


@pytest.fixture
def engine () -> sheetmidi.engine.SheetMidi:

	"""An engine in 4/4 with a seeded random source."""

	return sheetmidi.engine.SheetMidi(time_signature=4, rng=random.Random(42))


@pytest.fixture
def recorder (engine: sheetmidi.engine.SheetMidi) -> typing.Dict[str, list]:

	"""Collect every value the engine emits, keyed by event name."""

	received: typing.Dict[str, list] = {"chord": [], "note": [], "beat": []}

	for name, values in received.items():
		engine.events.on(name, values.append)

	return received
