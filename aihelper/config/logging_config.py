"""
Tiered Logging Configuration for AIHelper

Provides a flexible logging system with 5 levels:
- TRACE (5): Ultra-verbose debugging (full payloads, every attempt)
- DEBUG (10): Detailed debugging (request/response bodies when enabled)
- INFO (20): Standard operational messages (client creation, completions)
- WARN (30): Warnings (rate limits, retries)
- ERROR (40): Errors (terminal HTTP failures, exhausted retries)

Environment Variables:
- LOG_LEVEL: Global log level (TRACE, DEBUG, INFO, WARN, ERROR) [default: INFO]
- LOG_LEVEL_TRANSPORT: Override for the retrying HTTP transport
- LOG_LEVEL_CHAT: Override for the chat session store
- LOG_LEVEL_CLIENT: Override for provider clients and the client factory

Example Usage:
    from aihelper.config.logging_config import get_logger

    logger = get_logger(__name__)
    logger.trace("🔍 Raw payload: %s", payload)
    logger.info("✅ Client created")
    logger.warning("⚠️ Retrying request (attempt 2/3)")
"""

import logging
import os


# Define custom TRACE level (more verbose than DEBUG)
TRACE = 5
logging.addLevelName(TRACE, "TRACE")


def trace(self, message, *args, **kwargs):
    """Log a message with severity 'TRACE'."""
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kwargs)


# Add trace method to Logger class
logging.Logger.trace = trace


# Module name mapping: Python module path → Logical area name
MODULE_NAME_MAP = {
    "aihelper.llm.transport": "aihelper.transport",
    "aihelper.llm.chat_sessions": "aihelper.chat",
    "aihelper.llm.base": "aihelper.client",
    "aihelper.llm.openai_client": "aihelper.client",
    "aihelper.llm.anthropic_client": "aihelper.client",
    "aihelper.llm.factory": "aihelper.client",
}

AREA_OVERRIDES = ["TRANSPORT", "CHAT", "CLIENT"]


def get_log_level(module_name: str, default: str = "INFO") -> int:
    """
    Get the log level for a module, checking both area-specific and global env vars.

    Priority:
    1. Area-specific env var (LOG_LEVEL_TRANSPORT, LOG_LEVEL_CHAT, LOG_LEVEL_CLIENT)
    2. Global LOG_LEVEL env var
    3. Default level (INFO)

    Args:
        module_name: Python module name (e.g., "aihelper.llm.transport")
        default: Default log level if no env vars set

    Returns:
        Numeric log level (5=TRACE, 10=DEBUG, 20=INFO, 30=WARN, 40=ERROR)
    """
    logical_name = MODULE_NAME_MAP.get(module_name)

    if logical_name:
        area = logical_name.split(".")[-1].upper()
        area_level = os.getenv(f"LOG_LEVEL_{area}")
        if area_level:
            return _parse_log_level(area_level)

    global_level = os.getenv("LOG_LEVEL")
    if global_level:
        return _parse_log_level(global_level)

    return _parse_log_level(default)


def _parse_log_level(level_str: str) -> int:
    """
    Parse log level string to numeric value.

    Unknown names fall back to INFO.
    """
    level_map = {
        "TRACE": TRACE,
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
    }
    return level_map.get(level_str.upper(), logging.INFO)


def configure_logging(default_level: str = "INFO") -> None:
    """
    Configure the root logger with tiered levels and per-area control.

    Call once at application startup; library code only calls get_logger().

    Args:
        default_level: Default log level if LOG_LEVEL env var not set
    """
    global_level = os.getenv("LOG_LEVEL", default_level)
    numeric_level = _parse_log_level(global_level)

    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.info(f"🚀 Logging system initialized (global level: {global_level})")

    area_overrides = []
    for area in AREA_OVERRIDES:
        override = os.getenv(f"LOG_LEVEL_{area}")
        if override:
            area_overrides.append(f"{area}={override}")

    if area_overrides:
        root_logger.info(f"📋 Area overrides: {', '.join(area_overrides)}")


def get_logger(module_name: str) -> logging.Logger:
    """
    Get a logger for a module with appropriate log level.

    Args:
        module_name: Python module name (use __name__)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(module_name)
    logger.setLevel(get_log_level(module_name))
    return logger
