"""
This file contains URL and file helpers used by the resolution and materialization steps.
"""

import os
import pathlib
import shutil
import zipfile
from typing import Optional, Tuple
from urllib.parse import urlparse
from urllib.request import url2pathname

from ivybridge.bridge_exceptions import ArtifactIOError, ConfigurationError, ResolutionError

JAR_SCHEME = "jar:"
FILE_SCHEME = "file:"
JAR_ENTRY_SEPARATOR = "!/"
LOCAL_HOSTS = ("", "localhost")


class UrlUtils:
    """
    Helpers for the settings and manifest locations, which may be plain paths, file: URLs or jar: URLs.
    """

    @staticmethod
    def to_url(location: Optional[str]) -> Optional[str]:
        """
        Converts a path of a disk file or of a jar-located resource to a URL.

        Strings starting with "jar:" or "file:" are taken as URLs as they are, anything
        else is a filesystem path. None stays None.
        """
        if location is None:
            return None
        s = location.strip()
        if not s:
            raise ConfigurationError("Empty location can't be converted to a URL")
        if s.startswith(JAR_SCHEME) or s.startswith(FILE_SCHEME):
            parsed = urlparse(s)
            if not parsed.scheme:
                raise ConfigurationError(f"Malformed URL \"{s}\"")
            return s
        return pathlib.Path(s).expanduser().absolute().as_uri()

    @staticmethod
    def split_jar_url(url: str) -> Tuple[pathlib.Path, str]:
        """
        Splits "jar:file:/a/b.jar!/x/y" (or "jar:/a/b.jar!/x/y") into the archive path and the entry name.
        """
        rest = url[len(JAR_SCHEME):]
        if JAR_ENTRY_SEPARATOR not in rest:
            raise ArtifactIOError(f"Jar URL \"{url}\" has no \"{JAR_ENTRY_SEPARATOR}\" entry separator")
        archive, entry = rest.split(JAR_ENTRY_SEPARATOR, 1)
        if archive.startswith(FILE_SCHEME):
            archive_path = UrlUtils.file_url_to_path(archive)
        else:
            archive_path = pathlib.Path(url2pathname(archive))
        return archive_path, entry

    @staticmethod
    def file_url_to_path(url: str) -> pathlib.Path:
        """
        Local path of a file: URL. Only local hosts ("file:/x", "file:///x", "file://localhost/x") are accepted.
        """
        parsed = urlparse(url)
        if parsed.netloc not in LOCAL_HOSTS:
            raise ConfigurationError(f"URL \"{url}\" points to remote host \"{parsed.netloc}\", only local files can be read")
        return pathlib.Path(url2pathname(parsed.path))

    @staticmethod
    def read_url(url: str) -> bytes:
        """
        Reads the content of a file: or jar: URL.
        """
        try:
            if url.startswith(JAR_SCHEME):
                archive_path, entry = UrlUtils.split_jar_url(url)
                with zipfile.ZipFile(archive_path) as archive:
                    return archive.read(entry)
            if url.startswith(FILE_SCHEME):
                return UrlUtils.file_url_to_path(url).read_bytes()
        except (OSError, KeyError, zipfile.BadZipFile) as e:
            raise ArtifactIOError(f"Failed to open \"{url}\": {e}") from e
        raise ArtifactIOError(f"Unsupported URL \"{url}\", only \"file:\" and \"jar:\" URLs can be opened")

    @staticmethod
    def parent_dir(url: str) -> str:
        """
        Directory of the resource a URL points to, used for the "ivy.settings.dir" property.
        """
        if url.startswith(JAR_SCHEME):
            archive_path, entry = UrlUtils.split_jar_url(url)
            parent_entry = entry.rsplit("/", 1)[0] if "/" in entry else ""
            return f"jar:{archive_path.as_uri()}!/{parent_entry}"
        return str(UrlUtils.file_url_to_path(url).parent)


class FileUtils:
    """
    File helpers for resolved artifacts
    """

    @staticmethod
    def extension(path: pathlib.Path) -> str:
        """
        File extension without the leading dot: "a/b/c.jar" => "jar", "c.tar.gz" => "gz".
        """
        return pathlib.Path(path).suffix.lstrip(".")

    @staticmethod
    def verify_file(path: Optional[os.PathLike]) -> pathlib.Path:
        """
        Returns the path if it points to an existing regular file, raises ResolutionError otherwise.
        """
        if path is None:
            raise ResolutionError("Artifact has no local file")
        p = pathlib.Path(path)
        if not p.is_file():
            raise ResolutionError(f"Artifact file \"{p}\" doesn't exist or is not a regular file")
        return p

    @staticmethod
    def copy(source: pathlib.Path, directory: pathlib.Path) -> pathlib.Path:
        """
        Copies the file into the directory keeping its name, creating the directory if needed.
        """
        destination = pathlib.Path(directory) / pathlib.Path(source).name
        try:
            os.makedirs(directory, exist_ok=True)
            shutil.copyfile(source, destination)
        except OSError as e:
            raise ArtifactIOError(f"Failed to copy \"{source}\" to \"{directory}\": {e}") from e
        return destination
