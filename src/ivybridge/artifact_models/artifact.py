"""
Pydantic data models for the artifacts that flow through the ivybridge pipeline.

Resolution produces immutable ResolvedArtifact values (coordinates plus a verified
local file). Scope materialization wraps them into ScopedArtifact values, it never
mutates a resolved artifact. Inline dependency declarations from the build
configuration are parsed into ArtifactDeclaration models.
"""

import pathlib
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from ivybridge.bridge_exceptions import ConfigurationError
from ivybridge.bridge_utils import FileUtils

DEFAULT_TYPE = "jar"

ArtifactKey = Tuple[str, str, str, str, str]


class ArtifactCoordinates(BaseModel):
    """
    Maven-style coordinates of an artifact: groupId, artifactId, version, type and classifier.
    """

    group_id: str = Field(..., alias="groupId", min_length=1)
    artifact_id: str = Field(..., alias="artifactId", min_length=1)
    version: str = Field(..., min_length=1)
    type: str = Field(DEFAULT_TYPE)
    classifier: Optional[str] = Field(None)

    class Config:
        frozen = True
        populate_by_name = True

    @property
    def key(self) -> ArtifactKey:
        return (self.group_id, self.artifact_id, self.version, self.type or "", self.classifier or "")

    def __str__(self) -> str:
        parts = [self.group_id, self.artifact_id, self.type]
        if self.classifier:
            parts.append(self.classifier)
        parts.append(self.version)
        return ":".join(parts)


class _ArtifactIdentity:
    """
    Equality and hashing by coordinates only: the local file and the scope are not part of an artifact's identity.
    """

    def __eq__(self, other: Any) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.identity == other.identity

    def __hash__(self) -> int:
        return hash(self.identity)


class ResolvedArtifact(_ArtifactIdentity, BaseModel):
    """
    An artifact whose local file is known to exist.
    """

    coordinates: ArtifactCoordinates
    local_file: pathlib.Path = Field(..., alias="localFile")

    class Config:
        frozen = True
        populate_by_name = True

    @field_validator("local_file")
    @classmethod
    def _verify_local_file(cls, value: pathlib.Path) -> pathlib.Path:
        return FileUtils.verify_file(value)

    @classmethod
    def create(
        cls,
        group_id: str,
        artifact_id: str,
        version: str,
        type: Optional[str],
        classifier: Optional[str],
        local_file: pathlib.Path,
    ) -> "ResolvedArtifact":
        coordinates = ArtifactCoordinates(
            group_id=group_id,
            artifact_id=artifact_id,
            version=version,
            type=DEFAULT_TYPE if type is None else type,
            classifier=classifier or None,
        )
        return cls(coordinates=coordinates, local_file=local_file)

    @property
    def identity(self) -> ArtifactKey:
        return self.coordinates.key

    @property
    def group_id(self) -> str:
        return self.coordinates.group_id

    @property
    def artifact_id(self) -> str:
        return self.coordinates.artifact_id

    @property
    def version(self) -> str:
        return self.coordinates.version

    @property
    def type(self) -> str:
        return self.coordinates.type

    @property
    def classifier(self) -> Optional[str]:
        return self.coordinates.classifier

    def __str__(self) -> str:
        return str(self.coordinates)

    def __repr__(self) -> str:
        return f"ResolvedArtifact({self.coordinates}, file={self.local_file})"


class ScopedArtifact(_ArtifactIdentity, BaseModel):
    """
    A resolved artifact registered in a build scope ("compile", "runtime", "test", ...).
    Produced only by the scope materializer.
    """

    artifact: ResolvedArtifact
    scope: str = Field(..., min_length=1)

    class Config:
        frozen = True

    @property
    def identity(self) -> ArtifactKey:
        return self.artifact.identity

    @property
    def local_file(self) -> pathlib.Path:
        return self.artifact.local_file

    def __str__(self) -> str:
        return f"{self.artifact.coordinates}:{self.scope}"

    def __repr__(self) -> str:
        return f"ScopedArtifact({self}, file={self.local_file})"


class ArtifactDeclaration(BaseModel):
    """
    A dependency declared inline in the build configuration, Maven <dependency> style.
    """

    group_id: str = Field(..., alias="groupId", min_length=1)
    artifact_id: str = Field(..., alias="artifactId", min_length=1)
    version: str = Field(..., min_length=1)
    type: str = Field(DEFAULT_TYPE)
    classifier: Optional[str] = Field(None)

    class Config:
        frozen = True
        populate_by_name = True

    @classmethod
    def from_string(cls, declaration: str) -> "ArtifactDeclaration":
        """
        Parses "groupId:artifactId:version[:type[:classifier]]".
        """
        parts = [p.strip() for p in declaration.strip().split(":")]
        if len(parts) < 3 or len(parts) > 5 or not all(parts[:3]):
            raise ConfigurationError(
                f"Dependency \"{declaration}\" should be \"groupId:artifactId:version[:type[:classifier]]\""
            )
        data: Dict[str, Any] = {"group_id": parts[0], "artifact_id": parts[1], "version": parts[2]}
        if len(parts) > 3 and parts[3]:
            data["type"] = parts[3]
        if len(parts) > 4 and parts[4]:
            data["classifier"] = parts[4]
        return cls(**data)

    def to_coordinates(self) -> ArtifactCoordinates:
        return ArtifactCoordinates(
            group_id=self.group_id,
            artifact_id=self.artifact_id,
            version=self.version,
            type=self.type or DEFAULT_TYPE,
            classifier=self.classifier or None,
        )

    def __str__(self) -> str:
        return str(self.to_coordinates())
