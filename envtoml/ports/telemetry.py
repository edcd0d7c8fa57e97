"""Telemetry Port Interface.

Contract: Log structured events about a conversion (start, outcome, counts).
Implementations never receive raw environment values.
"""
from __future__ import annotations
from typing import Protocol, Any

class Telemetry(Protocol):
    def log(self, event: str, **fields: Any) -> None: ...
