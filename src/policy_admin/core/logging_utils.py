"""Central logging utilities for the policy admin backend.

Modules take ``logging.getLogger(__name__)`` directly; entry points
(the app lifespan, the seed script) call :func:`configure_logging` first.
"""

from __future__ import annotations

import logging
from typing import Final

from beartype import beartype

__all__: Final = [
    "configure_logging",
]

_DEFAULT_LOG_FORMAT: Final = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_is_configured: bool = False


@beartype
def configure_logging(
    *, level: int | str = logging.INFO, fmt: str = _DEFAULT_LOG_FORMAT
) -> None:
    """Configure the root logger exactly once.

    Calling this function multiple times is safe – configuration will only
    be applied on the first invocation.
    """
    global _is_configured
    if _is_configured:
        return

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.basicConfig(level=level, format=fmt)
    _is_configured = True

