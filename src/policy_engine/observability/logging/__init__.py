"""Observability – structured logging ports and helpers."""
from policy_engine.observability.logging.protocol import LogEvent, Logger, NullLogger
from policy_engine.observability.logging.factory import JsonLoggerFactory
from policy_engine.observability.logging.processors import ComponentProcessor, get_logger

__all__ = [
    "ComponentProcessor",
    "JsonLoggerFactory",
    "LogEvent",
    "Logger",
    "NullLogger",
    "get_logger",
]
