"""
Artifact models for ivybridge.

This package provides the Pydantic data models for artifact coordinates,
resolved artifacts, scoped artifacts and inline dependency declarations.
"""

from .artifact import (
    ArtifactCoordinates,
    ArtifactDeclaration,
    ResolvedArtifact,
    ScopedArtifact,
)

__all__ = [
    "ArtifactCoordinates",
    "ArtifactDeclaration",
    "ResolvedArtifact",
    "ScopedArtifact",
]
