"""
Registers resolved artifacts in a build scope.
"""

import logging
from typing import List, Optional, Sequence

from ivybridge.artifact_models import ResolvedArtifact, ScopedArtifact
from ivybridge.bridge_exceptions import ConfigurationError
from ivybridge.bridge_logger import IvyBridgeLogger, plural
from ivybridge.bridge_utils import FileUtils
from ivybridge.build_session import BuildSession


def add_artifacts(
    session: BuildSession,
    scope: str,
    artifacts: Sequence[ResolvedArtifact],
    logger: Optional[IvyBridgeLogger] = None,
    verbose: bool = False,
) -> List[ScopedArtifact]:
    """
    Adds artifacts to the scope specified.

    The session's resolved artifacts become the union of what they were and the new artifacts:
    an artifact already present (same coordinates) is kept as it was. Nothing is rolled back if a
    later pipeline step fails, running the same step again leaves the set unchanged.

    Args:
        session: Build session receiving the artifacts
        scope: Scope to add artifacts to: "compile", "runtime", "test", etc.
        artifacts: Resolved artifacts, non-empty
        logger: Logger for the summary line
        verbose: Whether the summary lists artifact files

    Returns:
        The scoped artifacts, in input order
    """
    if not scope:
        raise ConfigurationError("Scope is required to add artifacts")
    if not artifacts:
        raise ConfigurationError(f"No artifacts to add to \"{scope}\" scope")
    for artifact in artifacts:
        FileUtils.verify_file(artifact.local_file)

    scoped = [ScopedArtifact(artifact=a, scope=scope) for a in artifacts]
    session.resolved_artifacts = session.resolved_artifacts | set(scoped)

    logger = logger or IvyBridgeLogger()
    message = f"{len(scoped)} artifact{plural(len(scoped))} added to \"{scope}\" scope: "
    if verbose:
        logger.log(message + str([f"\"{a.artifact}\" ({a.local_file})" for a in scoped]), logging.INFO)
    else:
        logger.log(message + str([str(a.artifact) for a in scoped]), logging.INFO)

    return scoped
