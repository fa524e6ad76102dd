"""
Resolution engine for ivybridge.

This package handles:
1. The engine contract the pipeline resolves through
2. Report models describing resolved artifacts
3. Loading Ivy settings and Ivy module files
4. A filesystem engine resolving manifests against local repositories
"""

from .engine import DEFAULT_CONF, EngineFactory, ResolutionEngine
from .filesystem_engine import FileSystemEngine
from .report_models import (
    ArtifactDownloadReport,
    ArtifactOrigin,
    DownloadStatus,
    ModuleDescriptor,
    ModuleRevisionId,
    ReportedArtifact,
    ResolveReport,
)
from .settings import IvySettings

__all__ = [
    "DEFAULT_CONF",
    "EngineFactory",
    "ResolutionEngine",
    "FileSystemEngine",
    "ArtifactDownloadReport",
    "ArtifactOrigin",
    "DownloadStatus",
    "ModuleDescriptor",
    "ModuleRevisionId",
    "ReportedArtifact",
    "ResolveReport",
    "IvySettings",
]
