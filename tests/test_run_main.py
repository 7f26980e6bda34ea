"""
Tests for run.py main() with an injected container.
"""
from unittest.mock import MagicMock

import pytest

import run
from run import build_arg_parser, main
from wetcher.container import Container
from wetcher.services.crawl_driver import CrawlDriver
from wetcher.services.scheduler_service import JobScheduler

CONFIG = """
settings:
  user_agent: TestBot/1.0
  http_timeout: 3
  max_resources_per_cycle: 20
resources:
  - name: page
    url: https://example.com/list/page1
    period: 2s
    targets:
      title:
        single:
          path: //h1
    continuation:
      ref: //a[@rel='next']/@href
"""


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in ("USER_AGENT", "HTTP_TIMEOUT", "MAX_RESOURCES_PER_CYCLE", "MAX_WORKERS"):
        monkeypatch.delenv(f"WETCHER_{name}", raising=False)
    path = tmp_path / "watch.yml"
    path.write_text(CONFIG, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def no_signal_handlers(monkeypatch):
    monkeypatch.setattr(run, "install_signal_handlers", lambda stop_event: None)


def test_arg_parser_defaults_to_environment_config():
    args = build_arg_parser().parse_args([])
    assert args.config is None
    assert build_arg_parser().parse_args(["-c", "x.yml"]).config == "x.yml"


def test_container_wires_services_from_config(config_file):
    container = Container()
    container.config.CONFIG_PATH.from_value(str(config_file))

    driver = container.crawl_driver()
    scheduler = container.scheduler()

    assert isinstance(driver, CrawlDriver)
    assert driver.max_resources_per_cycle == 20
    assert container.http_service().user_agent == "TestBot/1.0"
    assert container.http_service().timeout == 3.0
    assert isinstance(scheduler, JobScheduler)
    assert [job.name for job in scheduler.jobs] == ["page"]
    assert scheduler.max_workers == 1


def test_main_returns_failure_on_config_error(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "bad.yml").write_text("resources:\n  - url: not-a-url\n", encoding="utf-8")

    assert main(["-c", str(tmp_path / "bad.yml")]) == 1


def test_main_returns_failure_when_config_missing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["-c", str(tmp_path / "nope")]) == 1


def test_main_serves_scheduler_from_injected_container(config_file):
    container = Container()
    container.config.CONFIG_PATH.from_value(str(config_file))
    fake_scheduler = MagicMock()
    container.scheduler.override(fake_scheduler)

    try:
        assert main([], container=container) == 0
    finally:
        container.scheduler.reset_override()

    fake_scheduler.serve.assert_called_once()


def test_main_treats_keyboard_interrupt_as_shutdown(config_file):
    container = Container()
    fake_scheduler = MagicMock()
    fake_scheduler.serve.side_effect = KeyboardInterrupt
    container.scheduler.override(fake_scheduler)

    try:
        assert main(["-c", str(config_file)], container=container) == 0
    finally:
        container.scheduler.reset_override()


def test_main_once_runs_each_job_and_exits(tmp_path, monkeypatch, caplog):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "page.html").write_text("<h1>Hello</h1>", encoding="utf-8")
    (tmp_path / "config.yml").write_text(
        "resources:\n"
        "  - path: page.html\n"
        "    period: 60\n"
        "    targets:\n"
        "      title: {single: {path: //h1}}\n",
        encoding="utf-8",
    )
    caplog.set_level("INFO")

    assert main(["-c", str(tmp_path / "config"), "--once"]) == 0

    assert '"Hello"' in caplog.text
    assert "resources_visited=1" in caplog.text
