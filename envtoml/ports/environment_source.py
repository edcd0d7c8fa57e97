"""EnvironmentSource Port Interface.

Contract: Return a read-only snapshot of name/value pairs to convert.
"""

from __future__ import annotations

from typing import Mapping, Protocol


class EnvironmentSource(Protocol):
    def snapshot(self) -> Mapping[str, str]: ...

    """
    Take one snapshot of the variables to convert (the live process
    environment, a dotenv file, a fixed mapping in tests).

    Called once per conversion. The converter does not read the source again
    during the same call, so later changes do not leak into a running
    conversion.
    """
