import os
from typing import Optional

import yaml

from wetcher.exceptions import ConfigError

CONFIG_EXTENSIONS = (".yml", ".yaml")


class ConfigFileStore:
    """Filesystem/YAML IO for the watcher config file.

    Responsibility: locate, read, and parse the YAML file on disk.
    It does NOT validate jobs.
    """

    def __init__(self, *, config_path: str):
        self.config_path = config_path

    def resolve_path(self) -> Optional[str]:
        """Return the config file to read: the path itself, or the path with a YAML extension."""
        candidates = [self.config_path] + [self.config_path + ext for ext in CONFIG_EXTENSIONS]
        for candidate in candidates:
            if os.path.isfile(candidate):
                return candidate
        return None

    def load_yaml_dict(self) -> dict:
        """Return the parsed YAML mapping, or an empty mapping if no file exists."""
        full_path = self.resolve_path()
        if full_path is None:
            return {}
        try:
            with open(full_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"could not read config file {full_path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"config file {full_path} is not valid YAML: {e}") from e
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"config file {full_path} does not contain a mapping")
        return data
