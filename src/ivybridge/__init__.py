"""
ivybridge resolves Ivy manifests and Maven-style inline dependencies into one list of
local artifacts, then adds them to a build scope or copies them to a directory.
"""

from ivybridge.bridge_config import BridgeConfig
from ivybridge.bridge_exceptions import ArtifactIOError, ConfigurationError, IvyBridgeException, ResolutionError
from ivybridge.build_session import BuildSession
from ivybridge.pipeline import PipelineResult, PipelineState, run_pipeline

__all__ = [
    "BridgeConfig",
    "ArtifactIOError",
    "ConfigurationError",
    "IvyBridgeException",
    "ResolutionError",
    "BuildSession",
    "PipelineResult",
    "PipelineState",
    "run_pipeline",
]
