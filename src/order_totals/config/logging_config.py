"""Logging setup shared by the API, the Streamlit app and the scripts."""
import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging once.

    ``level`` defaults to the configured ``log_level`` setting.
    """
    if level is None:
        from .settings import get_settings
        level = get_settings().log_level

    numeric = logging.getLevelName(str(level).upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO

    logging.basicConfig(level=numeric, format=LOG_FORMAT)
    logging.getLogger("order_totals").setLevel(numeric)
