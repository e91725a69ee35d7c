"""Remote template fetching for SNAPP.

Templates are identified by a short source string such as
``github:o1-labs/snapp-cli/templates/project#main`` and fetched as a
repository tarball. Only the files below the optional subdirectory are
copied into the target directory; no git history is carried over.

Downloaded archives are kept in a cache directory so that later runs can
work offline:

    <cache_dir>/<site>/<user>/<repo>/<ref>.tar.gz
"""

from __future__ import annotations

import gzip
import logging
import os
import re
import shutil
import tarfile
import tempfile
import urllib.parse
import zlib
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

import httpx

from snapp.utils.errors import DestinationNotEmptyError, TemplateFetchError

logger = logging.getLogger(__name__)

SUPPORTED_SITES: tuple[str, ...] = ("github", "gitlab", "bitbucket")
DEFAULT_REF = "HEAD"

_SOURCE_PATTERN = re.compile(
    r"^(?:(?:https://)?(?P<domain>[^:/\s]+\.[^:/\s]+)/|(?P<site>[^/:\s]+):)?"
    r"(?P<user>[^/\s#]+)/(?P<repo>[^/\s#]+)"
    r"(?P<subdir>(?:/[^/\s#]+)+)?/?"
    r"(?:#(?P<ref>\S+))?$"
)


@dataclass(frozen=True)
class TemplateSource:
    """Parsed template identifier.

    Attributes:
        site: Hosting site, one of SUPPORTED_SITES
        user: Repository owner
        repo: Repository name
        subdir: Path inside the repository ("" for the repository root)
        ref: Branch, tag or commit to fetch
    """

    site: str
    user: str
    repo: str
    subdir: str = ""
    ref: str = DEFAULT_REF

    @property
    def archive_url(self) -> str:
        """Download URL of the repository tarball at :attr:`ref`."""
        if self.site == "gitlab":
            return (
                f"https://gitlab.com/{self.user}/{self.repo}/-/archive/"
                f"{self.ref}/{self.repo}-{self.ref}.tar.gz"
            )
        if self.site == "bitbucket":
            return f"https://bitbucket.org/{self.user}/{self.repo}/get/{self.ref}.tar.gz"
        return f"https://github.com/{self.user}/{self.repo}/archive/{self.ref}.tar.gz"

    def cache_file(self, cache_dir: Path) -> Path:
        ref_name = urllib.parse.quote(self.ref, safe="")
        return cache_dir / self.site / self.user / self.repo / f"{ref_name}.tar.gz"

    def __str__(self) -> str:
        subdir = f"/{self.subdir}" if self.subdir else ""
        return f"{self.site}:{self.user}/{self.repo}{subdir}#{self.ref}"


def parse_template_source(src: str) -> TemplateSource:
    """Parse a template source string.

    Accepted forms::

        user/repo
        github:user/repo/sub/dir#ref
        https://gitlab.com/user/repo#ref

    Raises:
        TemplateFetchError: With code BAD_SRC for unparseable or unsupported sources
    """
    match = _SOURCE_PATTERN.match(src.strip())
    if not match:
        raise TemplateFetchError(f"could not parse template source: {src}", code="BAD_SRC")

    site = match.group("site")
    domain = match.group("domain")
    if domain:
        site = domain.rsplit(".", 1)[0]
    site = site or "github"
    if site not in SUPPORTED_SITES:
        raise TemplateFetchError(
            f"unsupported template host '{site}'. Supported: {', '.join(SUPPORTED_SITES)}",
            code="BAD_SRC",
        )

    repo = match.group("repo")
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]

    return TemplateSource(
        site=site,
        user=match.group("user"),
        repo=repo,
        subdir=(match.group("subdir") or "").strip("/"),
        ref=match.group("ref") or DEFAULT_REF,
    )


class TemplateFetcher:
    """Fetch a template archive and extract it into a new directory.

    HTTP Client Injection:
        An optional ``http_client`` can be passed for testing. An injected
        client is never closed by the fetcher.

    Args:
        cache_dir: Directory for downloaded archives
        use_cache: Use an already cached archive instead of downloading
        timeout: Download timeout in seconds, None for no timeout
        http_client: Optional pre-configured httpx client
    """

    def __init__(
        self,
        cache_dir: Path,
        *,
        use_cache: bool = True,
        timeout: float | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.cache_dir = Path(cache_dir).expanduser()
        self.use_cache = use_cache
        self.timeout = timeout
        self._http_client = http_client

    def fetch(self, source: str | TemplateSource, target: str | Path) -> Path:
        """Populate ``target`` with the template files.

        The target may be absent (it is created, parents included) or an
        empty directory. Nothing is downloaded when it is not. Files are
        unpacked into a staging directory beside the target and only moved
        into place once the whole archive has been read, so a failed fetch
        leaves the target as it was.

        Returns:
            The target directory

        Raises:
            DestinationNotEmptyError: If ``target`` already contains entries
            TemplateFetchError: For any other failure (see ``code``)
        """
        if isinstance(source, str):
            source = parse_template_source(source)
        target_path = Path(target)

        self.check_destination(target_path)
        archive = self._get_archive(source)
        self._extract(archive, source, target_path)
        logger.info("Template %s extracted to %s", source, target_path)
        return target_path

    @staticmethod
    def check_destination(target: Path) -> None:
        """Refuse to write into anything but an absent or empty directory."""
        if not target.exists():
            return
        if not target.is_dir():
            raise TemplateFetchError(
                f"destination exists and is not a directory: {target}",
                code="DEST_NOT_DIR",
            )
        try:
            has_entries = any(target.iterdir())
        except OSError as e:
            raise TemplateFetchError(
                f"could not read destination {target}: {e}", code="DEST_NOT_WRITABLE"
            ) from e
        if has_entries:
            raise DestinationNotEmptyError(str(target))

    def _get_archive(self, source: TemplateSource) -> Path:
        cache_file = source.cache_file(self.cache_dir)
        if self.use_cache and cache_file.is_file():
            logger.info("Using cached template archive %s", cache_file)
            return cache_file

        self._download(source.archive_url, cache_file)
        return cache_file

    def _download(self, url: str, destination: Path) -> None:
        """Stream ``url`` into ``destination``, replacing it atomically."""
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_name = tempfile.mkstemp(dir=destination.parent, prefix=".download-")
        except OSError as e:
            raise TemplateFetchError(
                f"could not write to template cache {destination.parent}: {e}",
                code="COULD_NOT_DOWNLOAD",
            ) from e

        temp_path = Path(temp_name)
        client = self._http_client or httpx.Client(timeout=httpx.Timeout(self.timeout))
        try:
            with os.fdopen(fd, "wb") as f:
                with client.stream("GET", url, follow_redirects=True) as response:
                    if response.status_code != 200:
                        raise TemplateFetchError(
                            f"could not download {url} (HTTP {response.status_code})",
                            code="COULD_NOT_DOWNLOAD",
                        )
                    for chunk in response.iter_bytes(chunk_size=8192):
                        f.write(chunk)
            temp_path.replace(destination)
            logger.info("Downloaded template archive %s", url)
        except httpx.HTTPError as e:
            self._discard(temp_path)
            raise TemplateFetchError(
                f"could not download {url}: {e}", code="COULD_NOT_DOWNLOAD"
            ) from e
        except OSError as e:
            self._discard(temp_path)
            raise TemplateFetchError(
                f"could not save {url} to {destination}: {e}", code="COULD_NOT_DOWNLOAD"
            ) from e
        except BaseException:
            self._discard(temp_path)
            raise
        finally:
            if self._http_client is None:
                client.close()

    def _extract(self, archive: Path, source: TemplateSource, target: Path) -> None:
        """Unpack the template into ``target`` through a staging directory."""
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            staging = Path(tempfile.mkdtemp(dir=target.parent, prefix=".snapp-"))
        except OSError as e:
            raise TemplateFetchError(
                f"could not create {target}: {e}", code="DEST_NOT_WRITABLE"
            ) from e

        try:
            # mkdtemp directories are mode 0700
            tree = staging / "template"
            tree.mkdir()
            self._unpack(archive, source, tree)
            self._move_into_place(tree, target)
        except OSError as e:
            raise TemplateFetchError(
                f"could not write template files to {target}: {e}",
                code="DEST_NOT_WRITABLE",
            ) from e
        finally:
            shutil.rmtree(staging, ignore_errors=True)

    def _unpack(self, archive: Path, source: TemplateSource, tree: Path) -> None:
        """Copy archive entries below ``source.subdir`` into ``tree``.

        The archive's single top-level directory is stripped. Absolute and
        parent-relative member paths are rejected; links and special files
        are skipped.
        """
        prefix = tuple(part for part in source.subdir.split("/") if part)
        extracted = 0

        try:
            with tarfile.open(archive, "r:*") as tar:
                for member in tar:
                    member_path = PurePosixPath(member.name)
                    parts = member_path.parts[1:]
                    if parts[: len(prefix)] != prefix:
                        continue
                    relative = parts[len(prefix) :]
                    if not relative:
                        continue
                    if member_path.is_absolute() or ".." in relative:
                        logger.warning("Skipping unsafe archive entry: %s", member.name)
                        continue

                    destination = tree.joinpath(*relative)
                    if member.isdir():
                        destination.mkdir(parents=True, exist_ok=True)
                    elif member.isfile():
                        destination.parent.mkdir(parents=True, exist_ok=True)
                        fileobj = tar.extractfile(member)
                        if fileobj is None:
                            continue
                        with fileobj, destination.open("wb") as out:
                            shutil.copyfileobj(fileobj, out)
                        os.chmod(destination, member.mode & 0o777 or 0o644)
                        extracted += 1
        except (tarfile.TarError, EOFError, gzip.BadGzipFile, zlib.error) as e:
            # A corrupt cached archive would fail every later run
            self._discard(archive)
            raise TemplateFetchError(
                f"could not read template archive {archive}: {e}", code="BAD_ARCHIVE"
            ) from e

        if extracted == 0:
            if prefix:
                raise TemplateFetchError(
                    f"template subdirectory '{source.subdir}' not found in {source}",
                    code="MISSING_SUBDIR",
                )
            raise TemplateFetchError(f"template archive for {source} is empty", code="BAD_ARCHIVE")

    @staticmethod
    def _move_into_place(tree: Path, target: Path) -> None:
        if target.is_dir():
            for entry in tree.iterdir():
                entry.replace(target / entry.name)
        else:
            tree.replace(target)

    @staticmethod
    def _discard(path: Path) -> None:
        try:
            path.unlink()
        except OSError:
            pass


__all__ = [
    "DEFAULT_REF",
    "SUPPORTED_SITES",
    "TemplateFetcher",
    "TemplateSource",
    "parse_template_source",
]
