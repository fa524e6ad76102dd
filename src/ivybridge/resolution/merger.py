"""
Merges manifest and inline dependencies into one list of resolved artifacts.
"""

from typing import List, Optional, Sequence

from ivybridge.artifact_models import ArtifactDeclaration, ResolvedArtifact
from ivybridge.bridge_exceptions import ConfigurationError
from ivybridge.bridge_logger import IvyBridgeLogger
from ivybridge.bridge_utils import FileUtils
from ivybridge.resolution.context import ResolverContext
from ivybridge.resolution.inline_resolver import resolve_inline_dependencies
from ivybridge.resolution.manifest_adapter import resolve_manifest_dependencies
from ivybridge.resolution.strategy import ArtifactResolver


def resolve_all_dependencies(
    context: ResolverContext,
    artifact_resolver: ArtifactResolver,
    manifest_url: Optional[str] = None,
    declarations: Optional[Sequence[ArtifactDeclaration]] = None,
    logger: Optional[IvyBridgeLogger] = None,
    verbose: bool = False,
) -> List[ResolvedArtifact]:
    """
    Resolves the manifest and the inline dependencies given, at least one of them is required.

    Returns:
        Manifest artifacts in engine report order followed by inline artifacts in declaration order
    """
    if context is None:
        raise ConfigurationError("Resolver context is required")
    if not (manifest_url or declarations):
        raise ConfigurationError("Either a manifest or inline dependencies should be specified")

    manifest_artifacts = (
        resolve_manifest_dependencies(context, manifest_url, logger, verbose) if manifest_url else []
    )
    inline_artifacts = (
        resolve_inline_dependencies(declarations, artifact_resolver, logger, verbose) if declarations else []
    )

    artifacts = manifest_artifacts + inline_artifacts
    for artifact in artifacts:
        FileUtils.verify_file(artifact.local_file)
    return artifacts
