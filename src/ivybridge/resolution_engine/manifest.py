"""
Parsing of Ivy module files (ivy.xml) and of their configuration mappings.
"""

import xml.etree.ElementTree as ET
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from ivybridge.bridge_exceptions import ResolutionError
from ivybridge.resolution_engine.report_models import ModuleRevisionId

ALL_CONFS = "*"
DEFAULT_CONF_MAPPING = "*->*"
WORKING_REVISION = "working"


class PublishedArtifact(BaseModel):
    """
    An artifact declared in <publications>, or inside a <dependency> to select specific artifacts.
    `confs` empty means "all configurations".
    """

    name: str
    type: str = "jar"
    ext: str = "jar"
    confs: List[str] = Field(default_factory=list)

    def in_confs(self, confs: Sequence[str]) -> bool:
        if not self.confs or ALL_CONFS in self.confs or ALL_CONFS in confs:
            return True
        return any(c in self.confs for c in confs)


class DependencyDescriptor(BaseModel):
    organisation: str
    module: str
    revision: str
    conf_mapping: Dict[str, List[str]] = Field(default_factory=dict)
    artifacts: List[PublishedArtifact] = Field(default_factory=list)

    @property
    def module_revision_id(self) -> ModuleRevisionId:
        return ModuleRevisionId.new_instance(self.organisation, self.module, self.revision)

    def dependency_confs(self, confs: Sequence[str]) -> List[str]:
        """
        Configurations of the dependency that the requested configurations of the depending module map to.
        Empty if the dependency is not used in any of them.
        """
        mapped: List[str] = []
        for left, right in self.conf_mapping.items():
            if left == ALL_CONFS or left in confs:
                mapped.extend(c for c in right if c not in mapped)
        return mapped


class IvyManifest(BaseModel):
    """
    The parts of an ivy.xml the engine uses: the <info> identity, <publications> and <dependencies>.
    """

    module_revision_id: ModuleRevisionId
    publications: List[PublishedArtifact] = Field(default_factory=list)
    dependencies: List[DependencyDescriptor] = Field(default_factory=list)
    location: Optional[str] = None

    @classmethod
    def parse(cls, content: bytes, location: str) -> "IvyManifest":
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            raise ResolutionError(f"Failed to parse Ivy file \"{location}\": {e}") from e

        if root.tag != "ivy-module":
            raise ResolutionError(f"Ivy file \"{location}\" should have <ivy-module> as root element, found <{root.tag}>")

        info = root.find("info")
        if info is None or not info.get("organisation") or not info.get("module"):
            raise ResolutionError(f"Ivy file \"{location}\" has no <info organisation=\"..\" module=\"..\"/>")

        module_revision_id = ModuleRevisionId.new_instance(
            info.get("organisation"), info.get("module"), info.get("revision") or WORKING_REVISION
        )

        publications: List[PublishedArtifact] = []
        publications_element = root.find("publications")
        if publications_element is not None:
            publications = [
                _published_artifact(e, module_revision_id.name) for e in publications_element.findall("artifact")
            ]

        dependencies: List[DependencyDescriptor] = []
        dependencies_element = root.find("dependencies")
        if dependencies_element is not None:
            default_conf = dependencies_element.get("defaultconf") or DEFAULT_CONF_MAPPING
            for element in dependencies_element.findall("dependency"):
                dependencies.append(_dependency(element, default_conf, module_revision_id, location))

        return cls(
            module_revision_id=module_revision_id,
            publications=publications,
            dependencies=dependencies,
            location=location,
        )

    def dependencies_for(self, confs: Sequence[str]) -> List[DependencyDescriptor]:
        return [d for d in self.dependencies if d.dependency_confs(confs)]

    def published_artifacts(self, confs: Sequence[str]) -> List[PublishedArtifact]:
        return [a for a in self.publications if a.in_confs(confs)]


def parse_conf_mapping(mapping: str) -> Dict[str, List[str]]:
    """
    Parses an Ivy configuration mapping:
      "default"                  => {"default": ["default"]}
      "compile->default;test->*" => {"compile": ["default"], "test": ["*"]}
      "runtime,test->runtime(*)" => {"runtime": ["runtime"], "test": ["runtime"]}
    """
    result: Dict[str, List[str]] = {}
    for part in mapping.split(";"):
        part = part.strip()
        if not part:
            continue
        if "->" in part:
            left, right = part.split("->", 1)
        else:
            left, right = part, part
        targets = [_strip_fallback(c) for c in right.split(",") if c.strip()]
        for conf in (c.strip() for c in left.split(",")):
            if conf:
                result.setdefault(conf, [])
                result[conf].extend(t for t in targets if t not in result[conf])
    return result


def _strip_fallback(conf: str) -> str:
    conf = conf.strip()
    if "(" in conf:
        conf = conf[: conf.index("(")].strip()
    return conf


def _split_confs(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [c.strip() for c in value.split(",") if c.strip()]


def _published_artifact(element: ET.Element, default_name: Optional[str] = None) -> PublishedArtifact:
    name = element.get("name") or default_name
    artifact_type = element.get("type") or "jar"
    return PublishedArtifact(
        name=name,
        type=artifact_type,
        ext=element.get("ext") or artifact_type,
        confs=_split_confs(element.get("conf")),
    )


def _dependency(
    element: ET.Element, default_conf: str, parent: ModuleRevisionId, location: str
) -> DependencyDescriptor:
    name = element.get("name")
    revision = element.get("rev")
    if not name or not revision:
        raise ResolutionError(f"<dependency> without name or rev in Ivy file \"{location}\"")
    return DependencyDescriptor(
        organisation=element.get("org") or parent.organisation,
        module=name,
        revision=revision,
        conf_mapping=parse_conf_mapping(element.get("conf") or default_conf),
        artifacts=[_published_artifact(e, name) for e in element.findall("artifact")],
    )
