"""
Logger wrapper used across ivybridge.
"""

import logging


class IvyBridgeLogger:
    """
    Logger class
    """

    def __init__(self, name: str = "ivybridge") -> None:
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.INFO)

    def log(self, debug_message: str, level: int, sanitized_error_message: str = "") -> None:
        """
        Log the debug message. The sanitized message, when given, is appended so that
        the user-facing summary stays short.
        """
        if sanitized_error_message:
            debug_message = f"{debug_message} ({sanitized_error_message})"
        self.logger.log(level=level, msg=debug_message)


def plural(count: int) -> str:
    return "" if count == 1 else "s"
