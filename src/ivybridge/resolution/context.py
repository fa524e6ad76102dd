"""
Resolver context: the resolution engine configured for one pipeline run.
"""

import logging
from typing import Optional

from ivybridge.bridge_exceptions import ConfigurationError
from ivybridge.bridge_logger import IvyBridgeLogger
from ivybridge.resolution_engine import EngineFactory, FileSystemEngine, ResolutionEngine


class ResolverContext:
    """
    Wraps the resolution engine built from a settings URL.

    A context is created once per pipeline run and is not reused across runs.
    """

    def __init__(self, settings_url: str, engine: ResolutionEngine):
        """
        Initialize the resolver context.

        Args:
            settings_url: URL of the settings the engine was configured from
            engine: The configured resolution engine
        """
        self.settings_url = settings_url
        self.engine = engine

    @classmethod
    def from_settings(
        cls,
        settings_url: str,
        engine_factory: EngineFactory = FileSystemEngine.from_settings,
        logger: Optional[IvyBridgeLogger] = None,
    ) -> "ResolverContext":
        """
        Creates a new context from the settings URL given.

        Args:
            settings_url: URL of the Ivy settings
            engine_factory: Callable building an engine from a settings URL

        Returns:
            New ResolverContext
        """
        if not settings_url:
            raise ConfigurationError("Resolver settings URL is required")

        engine = engine_factory(settings_url)
        if logger:
            logger.log(f"Resolution engine configured from \"{settings_url}\"", logging.DEBUG)
        return cls(settings_url, engine)

    def __repr__(self) -> str:
        return f"ResolverContext(settings={self.settings_url}, engine={type(self.engine).__name__})"
