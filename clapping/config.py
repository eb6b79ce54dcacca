import dataclasses
import logging
import os
import typing

import yaml

import clapping.constants


logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = "config.yaml"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclasses.dataclass (frozen=True)
class Settings:

	"""Runtime settings. Only the output port, display and log level are configurable."""

	port_index: int = clapping.constants.DEFAULT_PORT_INDEX
	display: bool = True
	log_level: str = "INFO"


def load_config (config_path: str = DEFAULT_CONFIG_PATH) -> typing.Dict[str, typing.Any]:

	"""
	Load configuration from a YAML file.

	A missing file is not an error; an empty dict is returned.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, 'r') as f:
		try:
			data = yaml.safe_load(f)
		except yaml.YAMLError as e:
			raise ValueError(f"Config file {config_path} is not valid YAML: {e}") from e

	if data is None:
		return {}

	if not isinstance(data, dict):
		raise ValueError(f"Config file {config_path} must contain a mapping, got {type(data).__name__}")

	return data


def settings_from_config (config: typing.Dict[str, typing.Any]) -> Settings:

	"""Build ``Settings`` from a loaded config mapping, falling back to defaults for missing keys."""

	midi = _section(config, 'midi')
	display_section = _section(config, 'display')
	logging_section = _section(config, 'logging')

	port_index = midi.get('port_index', clapping.constants.DEFAULT_PORT_INDEX)
	display = display_section.get('enabled', True)
	log_level = logging_section.get('level', "INFO")

	if isinstance(port_index, bool) or not isinstance(port_index, int) or port_index < 0:
		raise ValueError(f"midi.port_index must be a non-negative integer, got {port_index!r}")

	if str(log_level).upper() not in LOG_LEVELS:
		raise ValueError(f"logging.level must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")

	return Settings(port_index=port_index, display=bool(display), log_level=str(log_level).upper())


def _section (config: typing.Dict[str, typing.Any], name: str) -> typing.Dict[str, typing.Any]:

	"""Return a config section as a dict. A missing or empty section is ``{}``."""

	section = config.get(name)

	if section is None:
		return {}

	if not isinstance(section, dict):
		raise ValueError(f"Config section {name!r} must be a mapping, got {type(section).__name__}")

	return section
