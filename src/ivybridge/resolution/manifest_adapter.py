"""
Translates resolution engine reports for a manifest into resolved artifacts.
"""

import logging
from typing import List, Optional

from pydantic import ValidationError

from ivybridge.artifact_models import ResolvedArtifact
from ivybridge.bridge_exceptions import ConfigurationError, ResolutionError
from ivybridge.bridge_logger import IvyBridgeLogger
from ivybridge.bridge_utils import FileUtils
from ivybridge.resolution.context import ResolverContext
from ivybridge.resolution_engine import DEFAULT_CONF, ArtifactDownloadReport

# Keeps artifacts resolved from manifests apart from natively declared ones sharing the same group
IVY_PREFIX = "ivy."


def artifact_from_report(report: ArtifactDownloadReport, prefix: str = IVY_PREFIX) -> ResolvedArtifact:
    """
    Maps a download report to a resolved artifact.

    groupId, artifactId and version come from the identity found in the module descriptor's
    metadata, not from the report's artifact identity: the two can diverge and only the
    former is reliable.
    The artifact origin name ("core/annotations") plays as classifier, the manifest format has none.
    The type is the local file extension.

    Args:
        report: The engine's report for one artifact
        prefix: Prefix for the group id

    Returns:
        ResolvedArtifact with a verified local file
    """
    if report.local_file is None or report.artifact_origin is None:
        raise ResolutionError(
            f"Artifact \"{report.artifact.name}\" of \"{report.artifact.module_revision_id}\" has no local file"
            + (f": {report.download_details}" if report.download_details else "")
        )

    metadata_id = report.artifact.module_descriptor.module_revision_id
    if not (metadata_id.organisation and metadata_id.name and metadata_id.revision):
        raise ResolutionError(f"Incomplete module metadata \"{metadata_id.attributes}\"")
    local_file = FileUtils.verify_file(report.local_file)

    try:
        return ResolvedArtifact.create(
            group_id=prefix + metadata_id.organisation,
            artifact_id=metadata_id.name,
            version=metadata_id.revision,
            type=FileUtils.extension(local_file),
            classifier=report.artifact_origin.artifact_name,
            local_file=local_file,
        )
    except ValidationError as e:
        raise ResolutionError(f"Incomplete module metadata \"{metadata_id.attributes}\": {e}") from e


def resolve_manifest_dependencies(
    context: ResolverContext,
    manifest_url: str,
    logger: Optional[IvyBridgeLogger] = None,
    verbose: bool = False,
) -> List[ResolvedArtifact]:
    """
    Resolves the dependencies a manifest declares for the "default" configuration.

    Args:
        context: Configured resolver context
        manifest_url: URL of the manifest (ivy.xml)
        logger: Logger for verbose output
        verbose: Whether each artifact resolved is logged

    Returns:
        Artifacts in the order the engine reported them, never empty
    """
    if context is None or not manifest_url:
        raise ConfigurationError("Resolver context and manifest URL are required to resolve a manifest")

    report = context.engine.resolve(manifest_url, [DEFAULT_CONF])

    if report.has_error():
        raise ResolutionError(
            f"Failed to resolve \"{manifest_url}\": " + "; ".join(report.problem_messages or ["unknown error"])
        )

    artifact_reports = report.all_artifacts_reports
    if not artifact_reports:
        raise ResolutionError(f"No artifacts resolved from \"{manifest_url}\"")

    artifacts = []
    for artifact_report in artifact_reports:
        artifact = artifact_from_report(artifact_report)
        if verbose and logger:
            logger.log(
                f"[{manifest_url}] => \"{artifact.group_id}:{artifact.artifact_id}:{artifact.classifier}:"
                f"{artifact.version}\" ({artifact.local_file.resolve()})",
                logging.INFO,
            )
        artifacts.append(artifact)

    return artifacts
