"""
TextMarketer Adapters Layer.

This module contains the infrastructure implementation of the endpoint
interfaces and the XML wire codec it relies on.
"""

from textmarketer.adapters.textmarketer_adapter import (
    PRODUCTION_URL,
    SANDBOX_URL,
    TextMarketerAdapter,
)

__all__ = [
    "PRODUCTION_URL",
    "SANDBOX_URL",
    "TextMarketerAdapter",
]
