import logging


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once for the whole process."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # httpx logs every request line at INFO, which would include the API key
    logging.getLogger("httpx").setLevel(logging.WARNING)
