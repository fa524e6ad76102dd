"""
Resolution of dependencies declared inline in the build configuration.
"""

import logging
from typing import List, Optional, Sequence

from ivybridge.artifact_models import ArtifactDeclaration, ResolvedArtifact
from ivybridge.bridge_exceptions import ConfigurationError, ResolutionError
from ivybridge.bridge_logger import IvyBridgeLogger
from ivybridge.bridge_utils import FileUtils
from ivybridge.resolution.strategy import ArtifactResolver


def resolve_inline_dependencies(
    declarations: Sequence[ArtifactDeclaration],
    artifact_resolver: ArtifactResolver,
    logger: Optional[IvyBridgeLogger] = None,
    verbose: bool = False,
) -> List[ResolvedArtifact]:
    """
    Resolves each declaration through the active resolver strategy.

    Args:
        declarations: Inline dependencies, non-empty
        artifact_resolver: The build session's active resolver
        logger: Logger for verbose output
        verbose: Whether each artifact resolved is logged

    Returns:
        One artifact per declaration, in declaration order
    """
    if not declarations:
        raise ConfigurationError("No inline dependencies to resolve")

    artifacts = []
    for declaration in declarations:
        artifact = artifact_resolver.resolve_artifact(declaration.to_coordinates())

        if artifact is None:
            raise ResolutionError(f"Failed to resolve \"{declaration}\": no artifact returned")
        FileUtils.verify_file(artifact.local_file)

        if verbose and logger:
            logger.log(f"\"{declaration}\" => ({artifact.local_file})", logging.INFO)
        artifacts.append(artifact)

    assert len(artifacts) == len(declarations)
    return artifacts
