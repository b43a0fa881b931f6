import logging
import sys

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: int = logging.WARNING, fmt: str = DEFAULT_FORMAT, *, debug: bool = False) -> None:
    """Configure the root logger to write to stderr.

    Call once from the entry point; stdout is reserved for the rendered post.
    """
    if debug:
        level = logging.DEBUG
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    logging.basicConfig(level=level, format=fmt, handlers=handlers)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
