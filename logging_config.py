"""
Loggningsinställningar
"""

import logging

from rich.logging import RichHandler

from config import LOG_LEVEL

def configure(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_time=False, show_path=False)],
    )
    # Mindre brus från HTTP-klienten
    logging.getLogger("urllib3").setLevel(logging.WARNING)
