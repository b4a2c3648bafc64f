import asyncio
import logging
import sys

from status_notifier.config import DEFAULT_LOG_LEVEL, load_settings
from status_notifier.errors import ConfigError
from status_notifier.orchestrator import run_check

log = logging.getLogger(__name__)


class _BelowWarning(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.WARNING


def configure_logging(level_name: str = DEFAULT_LOG_LEVEL) -> None:
    """Progress to stdout, warnings and errors to stderr."""
    level = getattr(logging, level_name.upper(), None)
    if not isinstance(level, int):
        level = logging.INFO

    out = logging.StreamHandler(sys.stdout)
    out.addFilter(_BelowWarning())
    err = logging.StreamHandler(sys.stderr)
    err.setLevel(logging.WARNING)

    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[out, err],
    )


def main() -> int:
    """Single run: exit 0 whether or not anything changed, 1 on any failure."""
    try:
        settings = load_settings()
    except ConfigError as exc:
        configure_logging()
        log.error("%s", exc)
        return 1

    configure_logging(settings.log_level)

    try:
        asyncio.run(run_check(settings))
    except Exception:
        log.exception("Status check failed.")
        return 1
    return 0
