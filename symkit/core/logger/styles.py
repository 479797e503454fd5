"""
Logging style constants for consistent visual hierarchy.

Provides unified formatting symbols and separators used by the CLI and the
model layer's summary logging.
"""

from __future__ import annotations

import logging


class LogStyle:
    """Unified logging style constants for consistent visual hierarchy."""

    HEADER_WIDTH = 72

    # Level 1: Section headers
    HEAVY = "━" * HEADER_WIDTH

    # Level 2: Subsections / Separators
    LIGHT = "─" * HEADER_WIDTH

    # Symbols
    ARROW = "»"
    SUCCESS = "✓"

    # ANSI Colors (applied by ColorFormatter to console output only)
    RESET = "\033[0m"
    DIM = "\033[2m"
    BOLD = "\033[1m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    RED = "\033[31m"

    @staticmethod
    def log_header(log: logging.Logger, title: str, style: str | None = None) -> None:
        """
        Log a centered header framed by separator lines.

        Args:
            log: Logger instance to write to.
            title: Header text (centered).
            style: Separator string (defaults to ``LogStyle.HEAVY``).
        """
        sep = style if style is not None else LogStyle.HEAVY
        log.info(sep)
        log.info(f"{title:^{LogStyle.HEADER_WIDTH}}")
        log.info(sep)
