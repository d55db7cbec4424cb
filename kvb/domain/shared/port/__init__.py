"""Base marker for domain ports.

A port is a Protocol the domain depends on; infrastructure adapters
implement it and are bound to it in the DI providers.
"""

from typing import Protocol


class Port(Protocol):
    """Marker base for all domain ports."""
