"""
This module contains the exceptions raised by the ivybridge pipeline.
"""


class IvyBridgeException(Exception):
    """
    Base class for all ivybridge errors. Every error is fatal to the pipeline run.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(IvyBridgeException):
    """
    A required input is missing or malformed.
    """


class ResolutionError(IvyBridgeException):
    """
    The resolution engine failed, reported no artifacts, or an artifact has no usable local file.
    """


class ArtifactIOError(IvyBridgeException, OSError):
    """
    A settings or manifest URL could not be read, or an artifact file could not be copied.
    """
