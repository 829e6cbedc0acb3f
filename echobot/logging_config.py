import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger for the server and the client scripts."""
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Re-running (uvicorn reload, tests) must not stack handlers
    for handler in list(root_logger.handlers):
        if getattr(handler, "_echobot", False):
            root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    console_handler._echobot = True
    root_logger.addHandler(console_handler)
