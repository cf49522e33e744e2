import logging
import sys


def setup_logging(level: int = logging.INFO) -> None:
    """
    Configure the root logger for scripts and benchmarks.

    Uses the format "timestamp - logger name - level - message" and writes to
    stdout. The library itself only creates module loggers and never calls
    this on import.
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
