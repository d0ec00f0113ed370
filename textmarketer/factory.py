"""
Factory for TextMarketer adapters.

The adapter itself always receives its HTTP session; this module is the
one place where a default session is created from configuration.
"""

from typing import Optional

import requests
from loguru import logger

from textmarketer import config
from textmarketer.adapters.textmarketer_adapter import TextMarketerAdapter
from textmarketer.domain.models import Authentication


class AdapterFactory:
    """
    Factory for creating adapter instances.

    Provides convenience methods for common configurations.
    """

    @staticmethod
    def create_default(session: Optional[requests.Session] = None) -> TextMarketerAdapter:
        """
        Create an adapter configured from the environment.

        Args:
            session: HTTP session to use (a new requests.Session if None)

        Returns:
            Configured TextMarketerAdapter instance

        Raises:
            ValueError: If required configuration is missing or invalid
        """
        return AdapterFactory.create_custom(
            authentication=config.load_authentication(),
            session=session if session is not None else requests.Session(),
            base_url=config.get_base_url(),
            timeout=config.get_timeout(),
        )

    @staticmethod
    def create_custom(
        authentication: Authentication,
        session: requests.Session,
        base_url: str,
        timeout: int = config.DEFAULT_TIMEOUT,
    ) -> TextMarketerAdapter:
        """
        Create an adapter with explicit dependencies.

        Use this for testing with mocks or a custom session.
        """
        adapter = TextMarketerAdapter(
            authentication=authentication,
            session=session,
            base_url=base_url,
            timeout=timeout,
        )
        logger.debug(f"Created {adapter!r}")
        return adapter
