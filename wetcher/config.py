import os
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ENV_PREFIX = "WETCHER_"


def load_environment(dotenv_path: str = ".env") -> None:
	"""Load variables from a `.env` file into the process environment.

	Variables already present in the environment win over the file.
	"""
	loaded = load_dotenv(dotenv_path)
	if not loaded and Path(dotenv_path).exists():
		raise RuntimeError(f"{dotenv_path} file present but failed to load")


def env_name(name: str) -> str:
	return name if name.startswith(ENV_PREFIX) else ENV_PREFIX + name


def get_str_env(name: str, default: str) -> str:
	raw = os.getenv(env_name(name))
	if raw is None or raw == "":
		return default
	return raw


def get_optional_str_env(name: str) -> Optional[str]:
	raw = os.getenv(env_name(name))
	if raw is None or raw == "":
		return None
	return raw


def get_int_env(name: str, default: int) -> int:
	raw = os.getenv(env_name(name))
	if raw is None or raw == "":
		return default
	try:
		return int(raw)
	except ValueError:
		logging.exception("Invalid %s: %r", env_name(name), raw)
		return default


def get_optional_int_env(name: str) -> Optional[int]:
	raw = os.getenv(env_name(name))
	if raw is None or raw == "":
		return None
	try:
		return int(raw)
	except ValueError:
		logging.exception("Invalid %s: %r", env_name(name), raw)
		return None


def get_optional_float_env(name: str) -> Optional[float]:
	raw = os.getenv(env_name(name))
	if raw is None or raw == "":
		return None
	try:
		return float(raw)
	except ValueError:
		logging.exception("Invalid %s: %r", env_name(name), raw)
		return None


def config_path() -> str:
	return get_str_env("CONFIG", "./config")


def log_level() -> str:
	return get_str_env("LOG", "INFO").strip().upper()
