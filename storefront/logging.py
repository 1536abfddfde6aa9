from typing import Optional

from loguru import logger
from storefront.config import get_config

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)

# Level and handler id of the installed loguru sink; None until first use.
_configured_level: Optional[str] = None
_handler_id: Optional[int] = None


def configure_logging(force: bool = False) -> str:
    """Install the stdout sink at get_config().log_level.

    Streamlit reruns the page script and every module asks for a logger, so the
    sink is only replaced when the configured level changes (or ``force``).
    Records that were not bound to a name are attributed to "storefront".

    Returns:
        str: The level the sink is installed with.
    """
    global _configured_level, _handler_id
    log_level = get_config().log_level.upper()
    if force or log_level != _configured_level:
        logger.remove()
        logger.configure(extra={"name": "storefront"})
        _handler_id = logger.add(
            sink=lambda msg: print(msg, end=""),
            level=log_level,
            format=LOG_FORMAT,
        )
        _configured_level = log_level
    return log_level


def get_logger(name: str = None):
    """Get the storefront logger, bound to ``name`` when given.

    Args:
        name (str, optional): Module name shown in each record. Defaults to None.
    Returns:
        loguru.Logger: The configured logger instance.
    """
    configure_logging()
    if name:
        return logger.bind(name=name)
    return logger
