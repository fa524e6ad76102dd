"""
Tests for the filesystem resolution engine, Ivy settings and Ivy file parsing.
"""

import pytest

from ivybridge.bridge_exceptions import ArtifactIOError, ConfigurationError, ResolutionError
from ivybridge.resolution_engine import DownloadStatus, FileSystemEngine, IvySettings
from ivybridge.resolution_engine.filesystem_engine import substitute_pattern
from ivybridge.resolution_engine.manifest import IvyManifest, parse_conf_mapping
from tests.test_utils import create_ivy_repository, write_file


class TestSubstitutePattern:
    """Tests for Ivy pattern substitution."""

    def test_optional_group_dropped_without_value(self):
        """Test that an optional pattern group disappears when its token is unset."""
        tokens = {"module": "core", "artifact": "core", "revision": "1.0", "ext": "jar"}
        assert substitute_pattern("[module]/[artifact]-[revision](-[classifier]).[ext]", tokens) == "core/core-1.0.jar"

    def test_optional_group_kept_with_value(self):
        """Test that an optional pattern group is kept when its token is set."""
        tokens = {"artifact": "core", "revision": "1.0", "ext": "jar", "classifier": "sources"}
        assert substitute_pattern("[artifact]-[revision](-[classifier]).[ext]", tokens) == "core-1.0-sources.jar"

    def test_org_path(self):
        """Test that dots in the organisation become path separators."""
        assert substitute_pattern("[orgPath]/[module]", {"organisation": "org.example", "module": "core"}) == "org/example/core"


class TestConfMapping:
    """Tests for parsing configuration mappings."""

    def test_single_conf_maps_to_itself(self):
        """Test that a bare conf maps to the same conf."""
        assert parse_conf_mapping("default") == {"default": ["default"]}

    def test_several_mappings(self):
        """Test parsing several conf mappings."""
        assert parse_conf_mapping("compile->default;test->*") == {"compile": ["default"], "test": ["*"]}

    def test_fallback_is_dropped(self):
        """Test that fallback confs in parentheses are ignored."""
        assert parse_conf_mapping("runtime,test->runtime(*)") == {"runtime": ["runtime"], "test": ["runtime"]}


class TestIvyManifest:
    """Tests for parsing ivy.xml files."""

    def test_parse_dependencies_and_confs(self):
        """Test parsing an Ivy file's info, confs and dependencies."""
        manifest = IvyManifest.parse(
            b"""<ivy-module version="2.0">
                  <info organisation="com.acme" module="app"/>
                  <dependencies defaultconf="compile->default">
                    <dependency org="org.example" name="core" rev="1.0"/>
                    <dependency name="sibling" rev="0.1" conf="test"/>
                  </dependencies>
                </ivy-module>""",
            "memory:ivy.xml",
        )
        assert manifest.module_revision_id.organisation == "com.acme"
        assert manifest.module_revision_id.revision == "working"
        assert [d.module for d in manifest.dependencies_for(["compile"])] == ["core"]
        assert [d.module for d in manifest.dependencies_for(["test"])] == ["sibling"]
        assert manifest.dependencies[1].organisation == "com.acme"

    def test_missing_info_fails(self):
        """Test that an Ivy file needs an info element."""
        with pytest.raises(ResolutionError):
            IvyManifest.parse(b"<ivy-module/>", "memory:ivy.xml")

    def test_malformed_xml_fails(self):
        """Test that malformed XML fails the resolution."""
        with pytest.raises(ResolutionError):
            IvyManifest.parse(b"<ivy-module>", "memory:ivy.xml")


class TestIvySettings:
    """Tests for loading Ivy settings."""

    def test_properties_and_default_resolver(self, tmp_path):
        """Test property substitution and the default resolver."""
        repository = create_ivy_repository(tmp_path)
        settings = IvySettings.load(repository.settings_path.as_uri())

        assert settings.variables["repo.dir"] == f"{tmp_path}/repo"
        assert settings.default_resolver == "local"
        [resolver] = settings.get_resolvers()
        assert resolver.artifact_patterns[0].startswith(f"{tmp_path}/repo/[organisation]")

    def test_chain_of_resolvers(self, tmp_path):
        """Test parsing a chain resolver."""
        settings_path = write_file(
            tmp_path / "ivysettings.xml",
            """<ivysettings>
                 <settings defaultResolver="all"/>
                 <resolvers>
                   <filesystem name="first"><artifact pattern="/first/[artifact].[ext]"/></filesystem>
                   <chain name="all">
                     <resolver ref="first"/>
                     <filesystem name="second"><artifact pattern="/second/[artifact].[ext]"/></filesystem>
                   </chain>
                 </resolvers>
               </ivysettings>""",
        )
        settings = IvySettings.load(settings_path.as_uri())
        assert [r.name for r in settings.get_resolvers()] == ["first", "second"]
        assert [r.name for r in settings.get_resolvers("first")] == ["first"]

    def test_unknown_resolver_fails(self, tmp_path):
        """Test that a reference to an undefined resolver fails."""
        repository = create_ivy_repository(tmp_path)
        settings = IvySettings.load(repository.settings_path.as_uri())
        with pytest.raises(ConfigurationError):
            settings.get_resolvers("remote")

    def test_wrong_root_element_fails(self, tmp_path):
        """Test that settings need an ivysettings root."""
        settings_path = write_file(tmp_path / "ivysettings.xml", "<project/>")
        with pytest.raises(ResolutionError):
            IvySettings.load(settings_path.as_uri())

    def test_missing_settings_fails(self, tmp_path):
        """Test that unreadable settings fail."""
        with pytest.raises(ArtifactIOError):
            IvySettings.load((tmp_path / "missing.xml").as_uri())


class TestFileSystemEngine:
    """Tests for FileSystemEngine."""

    @pytest.fixture
    def repository(self, tmp_path):
        return create_ivy_repository(tmp_path)

    @pytest.fixture
    def engine(self, repository):
        return FileSystemEngine.from_settings(repository.settings_path.as_uri())

    def test_resolve_default_conf(self, engine, repository):
        """Test resolving the default conf and its transitive dependencies."""
        report = engine.resolve(repository.manifest_path.as_uri(), ["default"])

        assert not report.has_error()
        assert [r.artifact.name for r in report.all_artifacts_reports] == ["core", "core/annotations", "util"]
        assert [r.local_file.name for r in report.all_artifacts_reports] == [
            "core-1.0.jar",
            "annotations-1.0.jar",
            "util-2.0.jar",
        ]
        assert report.all_artifacts_reports[1].artifact_origin.artifact_name == "core/annotations"

    def test_resolve_reads_module_metadata(self, engine, repository):
        """Test that each report points at the module metadata it was read from."""
        report = engine.resolve(repository.manifest_path.as_uri(), ["default"])
        core = report.all_artifacts_reports[0]
        assert core.artifact.module_descriptor.metadata_location.endswith("core/1.0/ivy.xml")

    def test_resolve_test_conf(self, engine, repository):
        """Test resolving the test conf, which maps to other confs of the dependencies."""
        report = engine.resolve(repository.manifest_path.as_uri(), ["test"])
        assert [r.artifact.name for r in report.all_artifacts_reports] == ["util", "testkit"]

    def test_missing_artifact_is_reported(self, engine, repository):
        """Test that a missing artifact shows up as a problem."""
        (repository.module_dir("org.example", "util", "2.0") / "util-2.0.jar").unlink()
        report = engine.resolve(repository.manifest_path.as_uri(), ["default"])

        assert report.has_error()
        assert report.failed_artifacts_reports[0].download_status == DownloadStatus.FAILED
        assert report.problem_messages == ["unresolved artifact: org.example#util;2.0!util.jar"]

    def test_resolve_module(self, engine):
        """Test resolving a single module without an Ivy file."""
        report = engine.resolve_module("org.example", "core", "1.0", ["default"])
        assert [r.artifact.name for r in report.all_artifacts_reports] == ["core", "core/annotations"]
