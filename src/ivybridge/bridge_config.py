"""
Configuration parameters for the ivybridge pipeline.

The parameters can be given as a dict (camelCase or snake_case keys) or as a
TOML file with an [ivybridge] table:

    [ivybridge]
    settingsPath = "ivysettings.xml"
    manifestPath = "ivy.xml"
    scope = "compile"
    targetDir = "lib"
    verbose = true
    dependencies = [
        "org.example:core:1.0",
        { groupId = "ivy.org.example", artifactId = "tools", version = "2.1", classifier = "cli/tool" },
    ]
"""

import pathlib
import tomllib
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from ivybridge.artifact_models import ArtifactDeclaration
from ivybridge.bridge_exceptions import ConfigurationError

CONFIG_TABLE = "ivybridge"


class BridgeConfig(BaseModel):
    """
    Pipeline parameters, as supplied by the enclosing build configuration.
    """

    settings_path: Optional[str] = Field(
        None, alias="settingsPath", description="Ivy settings: file path, file: or jar: URL")
    manifest_path: Optional[str] = Field(
        None, alias="manifestPath", description="Ivy file: file path, file: or jar: URL")
    dependencies: List[ArtifactDeclaration] = Field(
        default_factory=list, description="Maven-style inline dependencies")
    scope: Optional[str] = Field(
        None, description="Scope to add the dependencies resolved to: compile, runtime, test, etc.")
    target_dir: Optional[pathlib.Path] = Field(
        None, alias="targetDir", description="Directory to copy the dependencies resolved to")
    verbose: bool = Field(False, description="Whether the pipeline logs every artifact")
    local_repository: Optional[pathlib.Path] = Field(
        None, alias="localRepository", description="Maven-layout repository for non-Ivy inline dependencies")

    class Config:
        populate_by_name = True

    @field_validator("settings_path", "manifest_path", "scope", "target_dir", "local_repository", mode="before")
    @classmethod
    def _blank_as_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("dependencies", mode="before")
    @classmethod
    def _parse_dependencies(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, (str, dict)):
            value = [value]
        return [ArtifactDeclaration.from_string(d) if isinstance(d, str) else d for d in value]

    @classmethod
    def from_dict(cls, env: Dict[str, Any]) -> "BridgeConfig":
        """
        Create a BridgeConfig instance from a dictionary
        """
        try:
            return cls(**env)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid ivybridge configuration: {e}") from e

    @classmethod
    def from_toml(cls, path: pathlib.Path) -> "BridgeConfig":
        """
        Create a BridgeConfig instance from the [ivybridge] table of a TOML file.
        Relative paths are resolved against the file's directory.
        """
        path = pathlib.Path(path)
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except OSError as e:
            raise ConfigurationError(f"Failed to read \"{path}\": {e}") from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Failed to parse \"{path}\": {e}") from e

        if CONFIG_TABLE not in data:
            raise ConfigurationError(f"\"{path}\" has no [{CONFIG_TABLE}] table")

        config = cls.from_dict(data[CONFIG_TABLE])
        return config.relative_to(path.parent)

    def relative_to(self, base_dir: pathlib.Path) -> "BridgeConfig":
        """
        Copy of this config with relative filesystem paths resolved against base_dir. URLs are kept.
        """

        def resolve(location: Optional[str]) -> Optional[str]:
            if location is None or location.strip().startswith(("jar:", "file:")):
                return location
            p = pathlib.Path(location).expanduser()
            return str(p if p.is_absolute() else base_dir / p)

        update: Dict[str, Any] = {
            "settings_path": resolve(self.settings_path),
            "manifest_path": resolve(self.manifest_path),
        }
        if self.target_dir is not None and not self.target_dir.is_absolute():
            update["target_dir"] = base_dir / self.target_dir
        if self.local_repository is not None and not self.local_repository.expanduser().is_absolute():
            update["local_repository"] = base_dir / self.local_repository
        return self.model_copy(update=update)
