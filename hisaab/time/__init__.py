"""
Hisaab Time — Public API
========================
Explicit clock protocol. Wall-clock reads go through an injected Clock.
"""

from hisaab.time.clock import Clock, FixedClock, SystemClock

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
]
