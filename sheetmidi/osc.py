"""OSC bridge between a SheetMidi engine and a host.

Start the server with ``await OscServer(engine).start()``. It listens on a UDP
port (default 9000) for commands and sends engine output to a target
host/port (default 127.0.0.1:9001).

Receive Handlers
────────────────
- ``/chords <word> <word> ...``: Replace the progression (one token per argument)
- ``/text <string>``: Replace the progression from free text
- ``/timesig <int>``: Set beats per bar
- ``/tick``: Advance one beat
- ``/seek <int>``: Jump to a beat
- ``/root``, ``/third``, ``/fifth``, ``/random``: Query a note
- ``/debug <0|1>``: Toggle per-chord debug logging
- ``/describe``: Log the stored progression

Send Events
───────────
- ``/chord <string>``: Active chord symbol
- ``/note <int>``: Note query result (semitones above C, unclamped)
- ``/beat <int>``: Current beat
"""

import asyncio
import logging
import typing

import pythonosc.dispatcher
import pythonosc.osc_server
import pythonosc.udp_client

if typing.TYPE_CHECKING:
	from sheetmidi.engine import SheetMidi


logger = logging.getLogger(__name__)


class OscServer:

	"""Async OSC server/client wrapping one engine."""

	def __init__ (
		self,
		engine: "SheetMidi",
		receive_port: int = 9000,
		send_port: int = 9001,
		send_host: str = "127.0.0.1"
	) -> None:

		self._engine = engine
		self._receive_port = receive_port
		self._send_port = send_port
		self._send_host = send_host

		self._server: typing.Optional[typing.Any] = None
		self._transport: typing.Optional[asyncio.BaseTransport] = None
		self._client: typing.Optional[pythonosc.udp_client.SimpleUDPClient] = None
		self._dispatcher = pythonosc.dispatcher.Dispatcher()

		self._queries: typing.Dict[str, typing.Callable[[], typing.Optional[int]]] = {
			"/root": engine.root,
			"/third": engine.third,
			"/fifth": engine.fifth,
			"/random": engine.random_note,
		}

		self._dispatcher.map("/chords", self._handle_chords)
		self._dispatcher.map("/text", self._handle_text)
		self._dispatcher.map("/timesig", self._handle_timesig)
		self._dispatcher.map("/tick", self._handle_tick)
		self._dispatcher.map("/seek", self._handle_seek)
		self._dispatcher.map("/debug", self._handle_debug)
		self._dispatcher.map("/describe", self._handle_describe)

		for address in self._queries:
			self._dispatcher.map(address, self._handle_query)

		engine.events.on("chord", self._send_chord)
		engine.events.on("note", self._send_note)
		engine.events.on("beat", self._send_beat)


	async def start (self) -> None:

		"""Start the OSC server and client."""

		self._client = pythonosc.udp_client.SimpleUDPClient(self._send_host, self._send_port)

		self._server = pythonosc.osc_server.AsyncIOOSCUDPServer(
			("0.0.0.0", self._receive_port),
			self._dispatcher,
			asyncio.get_event_loop()  # type: ignore[arg-type]
		)

		transport, _ = await self._server.create_serve_endpoint()
		self._transport = transport

		logger.info(f"OSC listening on :{self._receive_port}, sending to {self._send_host}:{self._send_port}")


	async def stop (self) -> None:

		"""Stop the OSC server."""

		if self._transport:
			self._transport.close()
			self._transport = None
			logger.info("OSC server stopped")


	def send (self, address: str, *args: typing.Any) -> None:

		"""Send an OSC message."""

		if self._client:
			try:
				self._client.send_message(address, args)
			except Exception as e:
				logger.warning(f"OSC send error: {e}")


	def _send_chord (self, symbol: str) -> None:
		self.send("/chord", symbol)

	def _send_note (self, note: int) -> None:
		self.send("/note", note)

	def _send_beat (self, beat: int) -> None:
		self.send("/beat", beat)


	# Handlers

	def _handle_chords (self, address: str, *args: typing.Any) -> None:
		self._engine.set_words(args)

	def _handle_text (self, address: str, *args: typing.Any) -> None:
		if not args:
			return
		self._engine.set_text(args[0])

	def _handle_timesig (self, address: str, *args: typing.Any) -> None:
		if not args:
			return
		try:
			self._engine.set_time_signature(args[0])
		except ValueError:
			logger.warning(f"Invalid OSC time signature: {args[0]}")

	def _handle_tick (self, address: str, *args: typing.Any) -> None:
		self._engine.tick()

	def _handle_seek (self, address: str, *args: typing.Any) -> None:
		if not args:
			return
		try:
			beat = int(args[0])
		except (ValueError, TypeError):
			logger.warning(f"Invalid OSC seek argument: {args[0]}")
			return
		self._engine.seek(beat)

	def _handle_query (self, address: str, *args: typing.Any) -> None:
		self._queries[address]()

	def _handle_debug (self, address: str, *args: typing.Any) -> None:
		enabled = bool(args[0]) if args else not self._engine.debug
		self._engine.set_debug(enabled)

	def _handle_describe (self, address: str, *args: typing.Any) -> None:
		self._engine.describe()
