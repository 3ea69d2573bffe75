import logging
import sys


_NOISY_LOGGERS = ("urllib3",)


def setup_logging(level=logging.WARNING, verbose=False):
    """
    Configure a single stderr handler on the root logger.

    Third-party loggers stay at WARNING unless ``verbose`` is set.
    Call this once, before the first log line.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)
