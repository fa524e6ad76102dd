"""
Artifact resolver strategies: how the build session turns coordinates into local files.
"""

import logging
import pathlib
from typing import List, Optional, Protocol

from ivybridge.artifact_models import ArtifactCoordinates, ResolvedArtifact
from ivybridge.bridge_exceptions import ResolutionError
from ivybridge.bridge_logger import IvyBridgeLogger
from ivybridge.resolution.context import ResolverContext
from ivybridge.resolution.manifest_adapter import IVY_PREFIX
from ivybridge.resolution_engine import DEFAULT_CONF, ArtifactDownloadReport

DEFAULT_LOCAL_REPOSITORY = pathlib.Path.home() / ".m2" / "repository"

# Maven types whose file extension or classifier differ from the type name
TYPE_EXTENSIONS = {
    "test-jar": ("jar", "tests"),
    "maven-plugin": ("jar", None),
    "ejb": ("jar", None),
    "ejb-client": ("jar", "client"),
    "bundle": ("jar", None),
    "java-source": ("jar", "sources"),
    "javadoc": ("jar", "javadoc"),
}


class ArtifactResolver(Protocol):
    def resolve_artifact(self, coordinates: ArtifactCoordinates) -> ResolvedArtifact:
        """
        Resolves coordinates to an artifact with an existing local file, raises ResolutionError otherwise.
        """
        ...


class LocalRepositoryArtifactResolver:
    """
    Looks artifacts up in a Maven-layout repository on disk:
    <root>/<group path>/<artifactId>/<version>/<artifactId>-<version>[-<classifier>].<extension>
    """

    def __init__(self, repository_root: Optional[pathlib.Path] = None):
        self.repository_root = pathlib.Path(repository_root or DEFAULT_LOCAL_REPOSITORY).expanduser()

    def artifact_path(self, coordinates: ArtifactCoordinates) -> pathlib.Path:
        extension, type_classifier = TYPE_EXTENSIONS.get(coordinates.type, (coordinates.type, None))
        classifier = coordinates.classifier or type_classifier
        file_name = f"{coordinates.artifact_id}-{coordinates.version}"
        if classifier:
            file_name += f"-{classifier}"
        file_name += f".{extension}"
        return (
            self.repository_root.joinpath(*coordinates.group_id.split("."))
            / coordinates.artifact_id
            / coordinates.version
            / file_name
        )

    def resolve_artifact(self, coordinates: ArtifactCoordinates) -> ResolvedArtifact:
        path = self.artifact_path(coordinates)
        if not path.is_file():
            raise ResolutionError(f"Artifact \"{coordinates}\" not found in \"{self.repository_root}\" ({path})")
        return ResolvedArtifact(coordinates=coordinates, local_file=path)


class IvyArtifactResolver:
    """
    Resolves "ivy."-prefixed coordinates through the resolution engine and hands everything
    else to the resolver it was chained to.

    For prefixed coordinates the organisation is the group without the prefix, the module is the
    artifactId, the revision is the version and the classifier, when given, selects the artifact
    by its published name.
    """

    def __init__(
        self,
        delegate: ArtifactResolver,
        context: ResolverContext,
        logger: Optional[IvyBridgeLogger] = None,
    ):
        self.delegate = delegate
        self.context = context
        self.logger = logger or IvyBridgeLogger()

    def resolve_artifact(self, coordinates: ArtifactCoordinates) -> ResolvedArtifact:
        if not coordinates.group_id.startswith(IVY_PREFIX):
            return self.delegate.resolve_artifact(coordinates)

        organisation = coordinates.group_id[len(IVY_PREFIX):]
        report = self.context.engine.resolve_module(
            organisation, coordinates.artifact_id, coordinates.version, [DEFAULT_CONF]
        )
        if report.has_error():
            raise ResolutionError(
                f"Failed to resolve \"{coordinates}\": " + "; ".join(report.problem_messages or ["unknown error"])
            )

        candidates = self._matching_reports(report.all_artifacts_reports, coordinates)
        if not candidates:
            raise ResolutionError(f"No artifact matching \"{coordinates}\" resolved by \"{self.context.settings_url}\"")
        if len(candidates) > 1:
            self.logger.log(
                f"{len(candidates)} artifacts match \"{coordinates}\", using \"{candidates[0].local_file}\"",
                logging.WARNING,
            )

        return ResolvedArtifact(coordinates=coordinates, local_file=candidates[0].local_file)

    @staticmethod
    def _matching_reports(
        reports: List[ArtifactDownloadReport], coordinates: ArtifactCoordinates
    ) -> List[ArtifactDownloadReport]:
        downloaded = [r for r in reports if r.is_downloaded()]
        if coordinates.classifier:
            downloaded = [
                r for r in downloaded
                if r.artifact_origin is not None and r.artifact_origin.artifact_name == coordinates.classifier
            ]
        return [r for r in downloaded if coordinates.type in (r.artifact.type, r.artifact.ext)]
