import logging
import sys

from student_performance.settings import log_level_or_default, settings

FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = settings.log_level) -> logging.Logger:
    """
    Set up logging configuration for the application.

    Streamlit re-runs the page script on every interaction, so the console
    handler is only attached once per process.
    """
    logger = logging.getLogger()
    logger.setLevel(log_level_or_default(level))

    if not any(getattr(h, "_performance_console", False) for h in logger.handlers):
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(FORMAT))
        console_handler._performance_console = True
        logger.addHandler(console_handler)

    return logger
