import logging
import sys


logger = logging.getLogger("collectionsync")


class _StdoutHandler(logging.StreamHandler):
    """Stream handler bound to whatever sys.stdout is when a record is emitted."""

    def emit(self, record):
        self.stream = sys.stdout
        super().emit(record)


def configure_logging(debug: bool):
    """
    Configures the logging system based on the debug flag.
    """
    log_level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(log_level)

    if not logger.handlers:
        handler = _StdoutHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
