"""Dependency injection container for the application."""
from dependency_injector import containers, providers
import requests

from wetcher import config as env
from wetcher.services.config_file_store import ConfigFileStore
from wetcher.services.config_service import ConfigService
from wetcher.services.continuation_resolver import ContinuationResolver
from wetcher.services.crawl_driver import CrawlDriver
from wetcher.services.document_parser import DocumentParser
from wetcher.services.fetcher_factory import FetcherFactory
from wetcher.services.file_service import FileService
from wetcher.services.http_service import HttpService
from wetcher.services.job_config_parser import JobConfigParser
from wetcher.services.scheduler_service import JobScheduler
from wetcher.services.target_evaluator import TargetEvaluator


# Environment variables read before the config file is loaded.
#
# WETCHER_CONFIG (str, default: "./config")
#   Config file path; ".yml"/".yaml" is appended when the bare path does not exist.
#   The -c/--config command line option takes precedence.
#
# WETCHER_LOG (str, default: "INFO")
#   Log level name for the root logger.
#
# Settings that override the config file's `settings:` block are read by
# ConfigService: WETCHER_USER_AGENT, WETCHER_HTTP_TIMEOUT,
# WETCHER_MAX_RESOURCES_PER_CYCLE, WETCHER_MAX_WORKERS.
ENV = {
    "CONFIG_PATH": env.config_path(),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for wetcher.

    `config.CONFIG_PATH` locates the file; everything downstream of
    `app_config` is built from the loaded AppConfig.
    """

    config = providers.Configuration(default=ENV)

    config_file_store = providers.Singleton(
        ConfigFileStore,
        config_path=config.CONFIG_PATH.as_(str),
    )

    config_service = providers.Singleton(
        ConfigService,
        file_store=config_file_store,
        job_parser=providers.Singleton(JobConfigParser),
    )

    # Loaded once; InvalidConfigError propagates to the caller.
    app_config = providers.Singleton(
        lambda service: service.load(),
        config_service,
    )

    settings = providers.Callable(lambda cfg: cfg.settings, app_config)

    http_service = providers.Singleton(
        HttpService,
        user_agent=providers.Callable(lambda s: s.user_agent, settings),
        http_client=providers.Object(requests.get),
        timeout=providers.Callable(lambda s: s.http_timeout, settings),
    )

    file_service = providers.Singleton(FileService)

    fetcher_factory = providers.Singleton(
        FetcherFactory,
        http_fetcher=http_service,
        file_fetcher=file_service,
    )

    document_parser = providers.Singleton(DocumentParser)

    target_evaluator = providers.Singleton(TargetEvaluator)

    continuation_resolver = providers.Singleton(ContinuationResolver)

    crawl_driver = providers.Singleton(
        CrawlDriver,
        fetcher_factory=fetcher_factory,
        document_parser=document_parser,
        target_evaluator=target_evaluator,
        continuation_resolver=continuation_resolver,
        max_resources_per_cycle=providers.Callable(lambda s: s.max_resources_per_cycle, settings),
    )

    scheduler = providers.Singleton(
        JobScheduler,
        jobs=providers.Callable(lambda cfg: cfg.jobs, app_config),
        run_cycle=crawl_driver.provided.run_cycle,
        max_workers=providers.Callable(lambda s: s.max_workers, settings),
    )
