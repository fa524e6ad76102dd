"""
Dependency resolution for ivybridge.

This package handles:
1. Building the resolver context from resolver settings
2. Chaining the Ivy resolver strategy in front of the build's own
3. Resolving manifest and inline dependencies into resolved artifacts
4. Merging both into one ordered list
"""

from .context import ResolverContext
from .inline_resolver import resolve_inline_dependencies
from .manifest_adapter import IVY_PREFIX, artifact_from_report, resolve_manifest_dependencies
from .merger import resolve_all_dependencies
from .strategy import ArtifactResolver, IvyArtifactResolver, LocalRepositoryArtifactResolver

__all__ = [
    "ResolverContext",
    "resolve_inline_dependencies",
    "IVY_PREFIX",
    "artifact_from_report",
    "resolve_manifest_dependencies",
    "resolve_all_dependencies",
    "ArtifactResolver",
    "IvyArtifactResolver",
    "LocalRepositoryArtifactResolver",
]
