"""Reporting exports."""
from .base import Reporter
from .json_reporter import JsonReporter
from .terminal import TerminalReporter

__all__ = [
    "Reporter",
    "JsonReporter",
    "TerminalReporter",
]
