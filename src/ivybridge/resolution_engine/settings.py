"""
Loading of Ivy settings files (ivysettings.xml, or the older ivyconf.xml).

Supported elements:
  <property name="..." value="..." override="true|false"/>
  <settings defaultResolver="..."/>   (<conf defaultResolver="..."/> in ivyconf files)
  <resolvers>
    <filesystem name="...">
      <ivy pattern="..."/>
      <artifact pattern="..."/>
    </filesystem>
    <chain name="..."> filesystem resolvers, or <resolver ref="..."/> </chain>
  </resolvers>

"${name}" references are substituted from the properties declared so far plus
"ivy.settings.dir", "ivy.settings.file", "ivy.settings.url" and "user.home".
"""

import pathlib
import re
import xml.etree.ElementTree as ET
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ivybridge.bridge_exceptions import ConfigurationError, ResolutionError
from ivybridge.bridge_utils import UrlUtils

VARIABLE_PATTERN = re.compile(r"\$\{([^}]+)\}")
SETTINGS_ROOTS = ("ivysettings", "ivyconf")


class FileSystemResolver(BaseModel):
    """
    A repository laid out on disk, described by ivy file and artifact patterns.
    """

    name: str
    ivy_patterns: List[str] = Field(default_factory=list)
    artifact_patterns: List[str] = Field(default_factory=list)


class IvySettings(BaseModel):
    """
    Resolvers and properties read from an Ivy settings file.

    `resolvers` maps a resolver name to the ordered filesystem resolvers it stands for:
    a filesystem resolver maps to itself, a chain to its members.
    """

    settings_url: str
    variables: Dict[str, str] = Field(default_factory=dict)
    default_resolver: Optional[str] = None
    resolvers: Dict[str, List[FileSystemResolver]] = Field(default_factory=dict)

    @classmethod
    def load(cls, settings_url: str) -> "IvySettings":
        content = UrlUtils.read_url(settings_url)
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            raise ResolutionError(f"Failed to parse Ivy settings \"{settings_url}\": {e}") from e

        if root.tag not in SETTINGS_ROOTS:
            raise ResolutionError(
                f"Ivy settings \"{settings_url}\" should have <ivysettings> as root element, found <{root.tag}>"
            )

        settings = cls(settings_url=settings_url, variables=cls._builtin_variables(settings_url))
        for element in root:
            if element.tag == "property":
                settings._add_property(element)
            elif element.tag in ("settings", "conf"):
                default_resolver = element.get("defaultResolver")
                if default_resolver:
                    settings.default_resolver = settings.substitute(default_resolver)
            elif element.tag == "resolvers":
                settings._add_resolvers(element)
        return settings

    @staticmethod
    def _builtin_variables(settings_url: str) -> Dict[str, str]:
        variables = {
            "ivy.settings.url": settings_url,
            "ivy.settings.dir": UrlUtils.parent_dir(settings_url),
            "user.home": str(pathlib.Path.home()),
        }
        if settings_url.startswith("file:"):
            variables["ivy.settings.file"] = str(UrlUtils.file_url_to_path(settings_url))
        return variables

    def substitute(self, value: str) -> str:
        """
        Replaces "${name}" references with property values, unknown references are kept.
        """
        return VARIABLE_PATTERN.sub(lambda m: self.variables.get(m.group(1), m.group(0)), value)

    def _add_property(self, element: ET.Element) -> None:
        name = element.get("name")
        value = element.get("value")
        if not name or value is None:
            return
        override = element.get("override", "false").lower() == "true"
        if override or name not in self.variables:
            self.variables[name] = self.substitute(value)

    def _add_resolvers(self, resolvers_element: ET.Element) -> None:
        for element in resolvers_element:
            if element.tag == "filesystem":
                resolver = self._filesystem_resolver(element)
                self.resolvers[resolver.name] = [resolver]
            elif element.tag == "chain":
                name = self._required_name(element)
                members: List[FileSystemResolver] = []
                for child in element:
                    if child.tag == "filesystem":
                        members.append(self._filesystem_resolver(child))
                    elif child.tag == "resolver":
                        ref = child.get("ref")
                        if ref not in self.resolvers:
                            raise ConfigurationError(
                                f"Chain \"{name}\" refers to unknown resolver \"{ref}\" in \"{self.settings_url}\""
                            )
                        members.extend(self.resolvers[ref])
                self.resolvers[name] = members

    def _filesystem_resolver(self, element: ET.Element) -> FileSystemResolver:
        return FileSystemResolver(
            name=self._required_name(element),
            ivy_patterns=[self.substitute(e.get("pattern", "")) for e in element.findall("ivy") if e.get("pattern")],
            artifact_patterns=[
                self.substitute(e.get("pattern", "")) for e in element.findall("artifact") if e.get("pattern")
            ],
        )

    def _required_name(self, element: ET.Element) -> str:
        name = element.get("name")
        if not name:
            raise ConfigurationError(f"<{element.tag}> resolver without a name in \"{self.settings_url}\"")
        return self.substitute(name)

    def get_resolvers(self, name: Optional[str] = None) -> List[FileSystemResolver]:
        """
        Filesystem resolvers to search, in order, for the resolver name given (default resolver if None).
        """
        if not self.resolvers:
            raise ConfigurationError(f"No resolvers declared in \"{self.settings_url}\"")

        name = name or self.default_resolver
        if not name:
            if len(self.resolvers) == 1:
                return next(iter(self.resolvers.values()))
            raise ConfigurationError(
                f"\"{self.settings_url}\" declares several resolvers but no defaultResolver"
            )
        if name not in self.resolvers:
            raise ConfigurationError(f"Unknown resolver \"{name}\" in \"{self.settings_url}\"")
        return self.resolvers[name]
