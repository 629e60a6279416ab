"""
Small async helpers built on the execution policies.
"""

from asynchof.simple.execute import execute
from asynchof.simple.sleep import sleep

__all__ = [
    "execute",
    "sleep",
]
