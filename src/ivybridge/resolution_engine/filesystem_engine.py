"""
A resolution engine over filesystem repositories declared in Ivy settings.

Only the dependencies declared directly by a manifest are resolved: there is no
transitive closure, no conflict resolution and no dynamic revision matching.
"""

import logging
import pathlib
import re
from typing import Dict, List, Optional, Sequence, Tuple

from ivybridge.bridge_logger import IvyBridgeLogger
from ivybridge.bridge_utils import UrlUtils
from ivybridge.resolution_engine.manifest import (
    DependencyDescriptor,
    IvyManifest,
    PublishedArtifact,
    parse_conf_mapping,
)
from ivybridge.resolution_engine.report_models import (
    ArtifactDownloadReport,
    ArtifactOrigin,
    DownloadStatus,
    ModuleDescriptor,
    ModuleRevisionId,
    ReportedArtifact,
    ResolveReport,
)
from ivybridge.resolution_engine.settings import FileSystemResolver, IvySettings

OPTIONAL_GROUP = re.compile(r"\(([^()]*)\)")
TOKEN = re.compile(r"\[([^\]]+)\]")


def substitute_pattern(pattern: str, tokens: Dict[str, Optional[str]]) -> str:
    """
    Fills an Ivy pattern. Optional "(...)" groups are dropped when a token inside them has no value:
      "[module]/[artifact](-[classifier]).[ext]" with no classifier => "core/core.jar"
    """

    def value(name: str) -> Optional[str]:
        if name == "orgPath":
            organisation = tokens.get("organisation")
            return organisation.replace(".", "/") if organisation else None
        return tokens.get(name)

    def optional_group(match: "re.Match[str]") -> str:
        content = match.group(1)
        if all(value(name) for name in TOKEN.findall(content)):
            return content
        return ""

    filled = OPTIONAL_GROUP.sub(optional_group, pattern)
    return TOKEN.sub(lambda m: value(m.group(1)) or m.group(0), filled)


class FileSystemEngine:
    """
    Resolves Ivy manifests and module revisions against the filesystem resolvers of an IvySettings.
    """

    def __init__(self, settings: IvySettings, logger: Optional[IvyBridgeLogger] = None):
        self.settings = settings
        self.logger = logger or IvyBridgeLogger()

    @classmethod
    def from_settings(cls, settings_url: str) -> "FileSystemEngine":
        return cls(IvySettings.load(settings_url))

    def resolve(self, manifest_url: str, confs: Sequence[str]) -> ResolveReport:
        manifest = IvyManifest.parse(UrlUtils.read_url(manifest_url), manifest_url)
        report = ResolveReport(module_revision_id=manifest.module_revision_id, confs=list(confs))

        for dependency in manifest.dependencies_for(confs):
            self._resolve_dependency(dependency, dependency.dependency_confs(confs), report)

        self.logger.log(
            f"Resolved \"{manifest.module_revision_id}\" [{', '.join(confs)}]: "
            f"{len(report.artifact_reports)} artifact(s), {len(report.problem_messages)} problem(s)",
            logging.DEBUG,
        )
        return report

    def resolve_module(
        self, organisation: str, module: str, revision: str, confs: Sequence[str]
    ) -> ResolveReport:
        dependency = DependencyDescriptor(
            organisation=organisation,
            module=module,
            revision=revision,
            conf_mapping=parse_conf_mapping("*->*"),
        )
        report = ResolveReport(module_revision_id=dependency.module_revision_id, confs=list(confs))
        self._resolve_dependency(dependency, list(confs), report)
        return report

    def _resolve_dependency(
        self, dependency: DependencyDescriptor, dependency_confs: List[str], report: ResolveReport
    ) -> None:
        requested_id = dependency.module_revision_id
        resolvers = self.settings.get_resolvers()
        descriptor, module_manifest = self._find_module_descriptor(resolvers, requested_id)

        if dependency.artifacts:
            artifacts = dependency.artifacts
        elif module_manifest is not None and module_manifest.publications:
            artifacts = module_manifest.published_artifacts(dependency_confs)
        else:
            artifacts = [PublishedArtifact(name=dependency.module)]

        for artifact in artifacts:
            reported = ReportedArtifact(
                name=artifact.name,
                type=artifact.type,
                ext=artifact.ext,
                module_revision_id=requested_id,
                module_descriptor=descriptor,
            )
            if self._already_reported(report, reported):
                continue
            report.artifact_reports.append(self._download_report(resolvers, reported))

        for failed in report.failed_artifacts_reports:
            message = f"unresolved artifact: {failed.artifact.module_revision_id}!{failed.artifact.name}.{failed.artifact.ext}"
            if message not in report.problem_messages:
                report.problem_messages.append(message)

    def _find_module_descriptor(
        self, resolvers: List[FileSystemResolver], requested_id: ModuleRevisionId
    ) -> Tuple[ModuleDescriptor, Optional[IvyManifest]]:
        tokens = self._tokens(requested_id, "ivy", "ivy", "xml")
        for resolver in resolvers:
            for pattern in resolver.ivy_patterns:
                path = pathlib.Path(substitute_pattern(pattern, tokens))
                if path.is_file():
                    location = path.absolute().as_uri()
                    module_manifest = IvyManifest.parse(UrlUtils.read_url(location), location)
                    return (
                        ModuleDescriptor(
                            module_revision_id=module_manifest.module_revision_id, metadata_location=location
                        ),
                        module_manifest,
                    )

        self.logger.log(f"No ivy file found for \"{requested_id}\", using default data", logging.DEBUG)
        return ModuleDescriptor(module_revision_id=requested_id), None

    def _download_report(
        self, resolvers: List[FileSystemResolver], artifact: ReportedArtifact
    ) -> ArtifactDownloadReport:
        tokens = self._tokens(artifact.module_revision_id, artifact.name, artifact.type, artifact.ext)
        tried: List[str] = []
        for resolver in resolvers:
            for pattern in resolver.artifact_patterns:
                path = pathlib.Path(substitute_pattern(pattern, tokens))
                tried.append(str(path))
                if path.is_file():
                    return ArtifactDownloadReport(
                        artifact=artifact,
                        artifact_origin=ArtifactOrigin(artifact_name=artifact.name, location=str(path)),
                        local_file=path,
                        download_status=DownloadStatus.SUCCESSFUL,
                    )

        return ArtifactDownloadReport(
            artifact=artifact,
            download_status=DownloadStatus.FAILED,
            download_details=f"tried {tried}",
        )

    @staticmethod
    def _tokens(module_revision_id: ModuleRevisionId, artifact: str, type: str, ext: str) -> Dict[str, Optional[str]]:
        return {
            "organisation": module_revision_id.organisation,
            "organization": module_revision_id.organisation,
            "module": module_revision_id.name,
            "revision": module_revision_id.revision,
            "artifact": artifact,
            "type": type,
            "ext": ext,
        }

    @staticmethod
    def _already_reported(report: ResolveReport, artifact: ReportedArtifact) -> bool:
        return any(
            r.artifact.module_revision_id == artifact.module_revision_id
            and r.artifact.name == artifact.name
            and r.artifact.type == artifact.type
            and r.artifact.ext == artifact.ext
            for r in report.artifact_reports
        )
