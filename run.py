import argparse
import logging
import signal
import sys
import threading
from typing import Optional

from wetcher import __version__
from wetcher import config
from wetcher.container import Container
from wetcher.exceptions import ConfigError

logger = logging.getLogger("wetcher")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wetcher",
        description="Periodically fetch documents, extract values with XPath targets and follow continuations",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="config file path, '.yml'/'.yaml' may be omitted (default: $WETCHER_CONFIG or ./config)",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="run one crawl cycle for every job immediately, then exit",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(level_name: str) -> None:
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        logger.warning("Unknown log level %r in WETCHER_LOG, using INFO", level_name)
        return
    logging.basicConfig(level=level, format=LOG_FORMAT)


def install_signal_handlers(stop_event: threading.Event) -> None:
    def _handle(signum, frame):
        logger.info("Received %s, shutting down", signal.Signals(signum).name)
        stop_event.set()

    signal.signal(signal.SIGINT, _handle)
    signal.signal(signal.SIGTERM, _handle)


def main(argv: Optional[list[str]] = None, container: Optional[Container] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    try:
        config.load_environment()
    except RuntimeError as e:
        configure_logging("INFO")
        logger.error("Failed to load environment: %s", e)
        return 1
    configure_logging(config.log_level())

    if container is None:
        container = Container()
        container.config.CONFIG_PATH.from_value(args.config or config.config_path())
    elif args.config:
        container.config.CONFIG_PATH.from_value(args.config)

    try:
        app_config = container.app_config()
    except ConfigError as e:
        logger.error("Failed to load configuration: %s", e)
        return 1
    logger.info("Loaded config: %r", app_config)

    if args.once:
        driver = container.crawl_driver()
        for job in app_config.jobs:
            logger.info("Job %s: %s", job.name, driver.run_cycle(job))
        return 0

    stop_event = threading.Event()
    install_signal_handlers(stop_event)

    logger.info("Running app..")
    try:
        container.scheduler().serve(stop_event)
    except KeyboardInterrupt:
        logger.info("Received interrupt, shutting down")
    return 0


if __name__ == '__main__':
    sys.exit(main())
