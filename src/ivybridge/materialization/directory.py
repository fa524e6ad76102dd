"""
Copies resolved artifacts to a local directory.
"""

import logging
import pathlib
from typing import Dict, Optional, Sequence

from ivybridge.artifact_models import ResolvedArtifact
from ivybridge.bridge_exceptions import ArtifactIOError, ConfigurationError
from ivybridge.bridge_logger import IvyBridgeLogger, plural
from ivybridge.bridge_utils import FileUtils


def copy_artifacts(
    directory: pathlib.Path,
    artifacts: Sequence[ResolvedArtifact],
    logger: Optional[IvyBridgeLogger] = None,
    verbose: bool = False,
) -> Dict[ResolvedArtifact, pathlib.Path]:
    """
    Copies artifacts to the directory specified, keeping file names. The directory is created if needed.

    The first failing copy raises ArtifactIOError and the remaining artifacts are not copied.

    Args:
        directory: Directory to copy the artifacts to
        artifacts: Resolved artifacts, non-empty
        logger: Logger for the summary line
        verbose: Whether the summary lists source and destination of every file

    Returns:
        Mapping of each artifact to its copy, in input order
    """
    if not directory:
        raise ConfigurationError("Directory is required to copy artifacts")
    if not artifacts:
        raise ConfigurationError(f"No artifacts to copy to \"{directory}\"")
    for artifact in artifacts:
        FileUtils.verify_file(artifact.local_file)

    directory = pathlib.Path(directory)
    files_copied: Dict[ResolvedArtifact, pathlib.Path] = {}
    for artifact in artifacts:
        files_copied[artifact] = FileUtils.copy(artifact.local_file, directory)

    for artifact in artifacts:
        if not (directory / artifact.local_file.name).is_file():
            raise ArtifactIOError(f"\"{artifact.local_file.name}\" is missing from \"{directory}\" after copying")

    logger = logger or IvyBridgeLogger()
    message = f"{len(artifacts)} artifact{plural(len(artifacts))} copied to \"{directory.resolve()}\": "
    if verbose:
        logger.log(message + str([f"\"{a}\" => \"{files_copied[a]}\"" for a in artifacts]), logging.INFO)
    else:
        logger.log(message + str([str(a) for a in artifacts]), logging.INFO)

    return files_copied
