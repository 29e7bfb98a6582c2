import argparse
import asyncio
import logging
import os
import random
import time
import typing

import yaml

import sheetmidi.engine
import sheetmidi.osc


# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


DEFAULT_PROGRESSION = "C | Am | Dm7 . G7 . | C"


def load_config (config_path: str = 'config.yaml') -> dict:

	"""
	Load configuration from a YAML file.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, 'r') as f:
		return yaml.safe_load(f) or {}


def build_engine (config: dict) -> sheetmidi.engine.SheetMidi:

	"""
	Create an engine from the ``engine`` section of a config and load its progression.
	"""

	engine_config = config.get('engine', {})
	seed = engine_config.get('seed')

	engine = sheetmidi.engine.SheetMidi(
		time_signature = engine_config.get('time_signature', 4),
		debug = engine_config.get('debug', False),
		rng = random.Random(seed) if seed is not None else None
	)

	engine.set_text(config.get('progression', DEFAULT_PROGRESSION))

	return engine


def play (engine: sheetmidi.engine.SheetMidi, bpm: float, beats: int) -> None:

	"""
	Tick through the progression in real time, logging the chord and root on each beat.
	"""

	seconds_per_beat = 60.0 / bpm

	for _ in range(beats):
		logger.info(f"Beat {engine.current_beat}: {engine.current_symbol()} root {engine.root()}")
		time.sleep(seconds_per_beat)
		engine.tick()


async def serve (engine: sheetmidi.engine.SheetMidi, osc_config: dict) -> None:

	"""
	Run the OSC bridge until cancelled.
	"""

	server = sheetmidi.osc.OscServer(
		engine,
		receive_port = osc_config.get('receive_port', 9000),
		send_port = osc_config.get('send_port', 9001),
		send_host = osc_config.get('send_host', '127.0.0.1')
	)

	await server.start()

	try:
		while True:
			await asyncio.sleep(1)
	finally:
		await server.stop()


def main (argv: typing.Optional[typing.List[str]] = None) -> None:

	"""
	Main entry point for the sheetmidi application.
	"""

	parser = argparse.ArgumentParser(prog="sheetmidi", description="Play a chord progression or serve it over OSC.")
	parser.add_argument("--config", default="config.yaml", help="path to a YAML config file")
	parser.add_argument("--osc", action="store_true", help="serve the engine over OSC instead of playing")
	args = parser.parse_args(argv)

	logger.info("SheetMidi starting...")

	config = load_config(args.config)
	engine = build_engine(config)
	engine.describe()

	playback = config.get('playback', {})

	try:
		if args.osc:
			asyncio.run(serve(engine, config.get('osc', {})))
		else:
			play(engine, bpm=playback.get('bpm', 120), beats=playback.get('beats', engine.sequence.total_duration))
	except KeyboardInterrupt:
		logger.info("Stopping...")


if __name__ == "__main__":
	main()
