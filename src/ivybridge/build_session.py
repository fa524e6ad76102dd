"""
The build session the pipeline works against.

A build session holds the active artifact resolver strategy and the set of
artifacts resolved for the build. Both are process-wide state in a real build;
here they live on an explicit object handed to the pipeline so that callers
(and tests) decide which session is mutated.
"""

from typing import Optional, Set

from ivybridge.artifact_models import ScopedArtifact
from ivybridge.resolution.strategy import ArtifactResolver


class BuildSession:
    """
    Mutable holder of the resolution strategy and of the build's resolved artifacts.
    Not safe for concurrent pipeline runs.
    """

    def __init__(
        self,
        artifact_resolver: ArtifactResolver,
        resolved_artifacts: Optional[Set[ScopedArtifact]] = None,
    ):
        self.artifact_resolver = artifact_resolver
        self.resolved_artifacts: Set[ScopedArtifact] = set(resolved_artifacts or ())

    def install_artifact_resolver(self, artifact_resolver: ArtifactResolver) -> ArtifactResolver:
        """
        Makes the resolver given the active strategy.

        Returns:
            The previously active resolver
        """
        previous = self.artifact_resolver
        self.artifact_resolver = artifact_resolver
        return previous

    def artifacts_in_scope(self, scope: str) -> Set[ScopedArtifact]:
        return {a for a in self.resolved_artifacts if a.scope == scope}

    def __repr__(self) -> str:
        return (
            f"BuildSession(resolver={type(self.artifact_resolver).__name__}, "
            f"resolved_artifacts={len(self.resolved_artifacts)})"
        )
