from __future__ import annotations

import logging


def configure_moselect_logging(*, level: int = logging.INFO) -> None:
    """
    Configure a minimal console logger for moselect.

    Notes:
        - Opt-in only; library modules never call logging.basicConfig().
        - The handler is only attached if neither the root logger nor the "moselect" logger has handlers.
    """
    root = logging.getLogger()
    package_logger = logging.getLogger("moselect")

    # Respect logging the host application already configured.
    if root.handlers or package_logger.handlers:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False


__all__ = ["configure_moselect_logging"]
