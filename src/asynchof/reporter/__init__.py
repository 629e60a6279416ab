"""
Line-oriented reporting for execution policies.
"""

from asynchof.reporter.system_reporter import (
    SystemReporter,
    get_reporter,
    set_reporter,
)

__all__ = [
    "SystemReporter",
    "get_reporter",
    "set_reporter",
]
