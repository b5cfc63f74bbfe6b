import logging
import sys
from typing import Literal

_LOG_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
)


def setup_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | str = "INFO",
) -> None:
    """
    Configure the root logger once; later calls only adjust the level.
    """
    logging.basicConfig(
        level=level,
        format=_LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger().setLevel(level)

    logging.getLogger("uvicorn.error").setLevel(level)
    logging.getLogger("uvicorn.access").setLevel(level)
