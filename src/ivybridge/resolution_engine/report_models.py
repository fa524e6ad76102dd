"""
Pydantic data models for the reports produced by a resolution engine.

The models follow Ivy's report structure: a ResolveReport holds one
ArtifactDownloadReport per artifact, each naming the artifact as it was
requested (ReportedArtifact, with its nominal module revision id), the module
descriptor the artifact belongs to, the artifact origin and the local file.

The nominal module revision id of an artifact and the identity found in its
module descriptor's metadata may differ, e.g. when a dynamic revision such as
"latest.integration" was requested. Consumers that need the real coordinates
must read them from the module descriptor.
"""

import pathlib
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

ORGANISATION = "organisation"
MODULE = "module"
REVISION = "revision"


class DownloadStatus:
    """Enumeration of artifact download statuses."""

    SUCCESSFUL = "successful"
    FAILED = "failed"
    NO = "no"


class ModuleRevisionId(BaseModel):
    """
    Identity of a module revision, kept as the raw attribute map Ivy uses ("organisation", "module", "revision").
    """

    attributes: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def new_instance(cls, organisation: str, module: str, revision: str) -> "ModuleRevisionId":
        return cls(attributes={ORGANISATION: organisation, MODULE: module, REVISION: revision})

    @property
    def organisation(self) -> Optional[str]:
        return self.attributes.get(ORGANISATION)

    @property
    def name(self) -> Optional[str]:
        return self.attributes.get(MODULE)

    @property
    def revision(self) -> Optional[str]:
        return self.attributes.get(REVISION)

    def __str__(self) -> str:
        return f"{self.organisation}#{self.name};{self.revision}"


class ModuleDescriptor(BaseModel):
    """
    Descriptor of the module an artifact belongs to. `module_revision_id` is the identity read
    from the module's own metadata (its ivy.xml <info> element).
    """

    module_revision_id: ModuleRevisionId
    metadata_location: Optional[str] = None


class ReportedArtifact(BaseModel):
    """
    The artifact as named in the resolution request.
    """

    name: str
    type: str = "jar"
    ext: str = "jar"
    module_revision_id: ModuleRevisionId
    module_descriptor: ModuleDescriptor


class ArtifactOrigin(BaseModel):
    """
    Where the artifact was found. `artifact_name` is the artifact name as published by the module
    and can be path-like, e.g. "core/annotations".
    """

    artifact_name: str
    location: str
    is_local: bool = True


class ArtifactDownloadReport(BaseModel):
    """
    Outcome of retrieving a single artifact.
    """

    artifact: ReportedArtifact
    artifact_origin: Optional[ArtifactOrigin] = None
    local_file: Optional[pathlib.Path] = None
    download_status: str = DownloadStatus.SUCCESSFUL
    download_details: str = ""

    def is_downloaded(self) -> bool:
        return self.download_status == DownloadStatus.SUCCESSFUL and self.local_file is not None


class ResolveReport(BaseModel):
    """
    Outcome of resolving a module (a manifest or a single module revision) for a set of configurations.
    """

    module_revision_id: ModuleRevisionId
    confs: List[str] = Field(default_factory=list)
    artifact_reports: List[ArtifactDownloadReport] = Field(default_factory=list)
    problem_messages: List[str] = Field(default_factory=list)

    @property
    def all_artifacts_reports(self) -> List[ArtifactDownloadReport]:
        return list(self.artifact_reports)

    @property
    def failed_artifacts_reports(self) -> List[ArtifactDownloadReport]:
        return [r for r in self.artifact_reports if r.download_status == DownloadStatus.FAILED]

    def has_error(self) -> bool:
        return bool(self.problem_messages) or bool(self.failed_artifacts_reports)
