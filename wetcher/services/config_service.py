import logging
from dataclasses import replace
from typing import Any, Optional

from wetcher import config as env
from wetcher.domain.config import AppConfig, AppSettings
from wetcher.domain.job import Job
from wetcher.exceptions import InvalidConfigError
from wetcher.services.config_file_store import ConfigFileStore
from wetcher.services.job_config_parser import JobConfigParser

logger = logging.getLogger(__name__)


class ConfigService:
    """Builds the AppConfig from the YAML file layered under WETCHER_* environment variables."""

    def __init__(self, file_store: ConfigFileStore, job_parser: Optional[JobConfigParser] = None):
        self.file_store = file_store
        self.job_parser = job_parser or JobConfigParser()

    def load(self) -> AppConfig:
        data = self.file_store.load_yaml_dict()
        settings = self._load_settings(data.get("settings") or {})

        resources = data.get("resources")
        if resources is None:
            raise InvalidConfigError("resources", "missing field")
        if not isinstance(resources, list):
            raise InvalidConfigError("resources", "expected a list of jobs")

        jobs = [
            self.job_parser.parse(data=entry, location=f"resources[{i}]")
            for i, entry in enumerate(resources)
        ]
        jobs = tuple(_unique_default_names(jobs, resources))
        names = [job.name for job in jobs]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise InvalidConfigError("resources", f"duplicate job names {duplicates}")

        logger.info("Loaded %s job(s) from %s", len(jobs), self.file_store.resolve_path() or "<environment>")
        return AppConfig(jobs=jobs, settings=settings)

    def _load_settings(self, data: Any) -> AppSettings:
        if not isinstance(data, dict):
            raise InvalidConfigError("settings", "expected a mapping")
        defaults = AppSettings()

        user_agent = env.get_optional_str_env("USER_AGENT") or data.get("user_agent", defaults.user_agent)
        http_timeout = env.get_optional_float_env("HTTP_TIMEOUT")
        if http_timeout is None:
            http_timeout = _number(data.get("http_timeout", defaults.http_timeout), "settings.http_timeout")
        max_resources = env.get_optional_int_env("MAX_RESOURCES_PER_CYCLE")
        if max_resources is None:
            max_resources = int(_number(data.get("max_resources_per_cycle", defaults.max_resources_per_cycle), "settings.max_resources_per_cycle"))
        max_workers = env.get_optional_int_env("MAX_WORKERS")
        if max_workers is None and data.get("max_workers") is not None:
            max_workers = int(_number(data.get("max_workers"), "settings.max_workers"))

        if http_timeout <= 0:
            raise InvalidConfigError("settings.http_timeout", "must be positive")
        if max_resources <= 0:
            raise InvalidConfigError("settings.max_resources_per_cycle", "must be positive")
        if max_workers is not None and max_workers <= 0:
            raise InvalidConfigError("settings.max_workers", "must be positive")

        return AppSettings(
            user_agent=str(user_agent),
            http_timeout=float(http_timeout),
            max_resources_per_cycle=max_resources,
            max_workers=max_workers,
        )


def _number(value: Any, location: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidConfigError(location, f"expected a number, got {value!r}")
    return value


def _unique_default_names(jobs: list[Job], entries: list) -> list[Job]:
    """Suffix unnamed jobs with "#<index>" when their resource-derived name is shared."""
    names = [job.name for job in jobs]
    renamed = []
    for i, (job, entry) in enumerate(zip(jobs, entries)):
        if not entry.get("name") and names.count(job.name) > 1:
            job = replace(job, name=f"{job.name}#{i}")
        renamed.append(job)
    return renamed
