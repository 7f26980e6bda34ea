from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from wetcher.domain.job import Job

DEFAULT_USER_AGENT = "wetcher/0.1"


@dataclass(frozen=True)
class AppSettings:
    """Process-wide settings shared by every job."""

    user_agent: str = DEFAULT_USER_AGENT
    http_timeout: float = 10.0
    max_resources_per_cycle: int = 1000
    max_workers: Optional[int] = None


@dataclass(frozen=True)
class AppConfig:
    """Loaded configuration: the job list plus settings."""

    jobs: tuple[Job, ...]
    settings: AppSettings = field(default_factory=AppSettings)

    def __repr__(self):
        return f"<AppConfig jobs={[job.name for job in self.jobs]} settings={self.settings}>"
