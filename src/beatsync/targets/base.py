"""Base render target definition."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from beatsync.artifacts.base import ArtifactKind

DEFAULT_MARKER = "beat-"
DEFAULT_OWNED_DIR = "beat"


class NamingStrategy(str, Enum):
    """How destination file names are built."""

    FLAT = "flat"  # {root}/{marker}{module}-{kind}-{name}{ext}
    NESTED = "nested"  # {root}/{module}/{kinds}/{name}{ext}


class EnvelopeFormat(str, Enum):
    """Metadata wrapper placed around an artifact body."""

    NONE = "none"
    MARKDOWN = "markdown"
    FRONTMATTER = "frontmatter"
    MDC = "mdc"
    TOML = "toml"


class CleanupPolicy(str, Enum):
    """Which entries in the install dir a target owns."""

    PREFIX = "prefix"  # entries whose name starts with the marker
    OWNED_DIRECTORY = "owned-directory"  # the owned subdirectory


@dataclass(frozen=True)
class RenderTarget:
    """File-layout convention of one IDE/CLI integration.

    A plain configuration value: rendering, cleanup and detection are
    generic functions driven by these fields.
    """

    name: str
    display_name: str
    install_dir: str  # relative to the project dir, or "~/..." for user-level
    naming: NamingStrategy
    envelope: EnvelopeFormat
    extension: str = ".md"
    cleanup: CleanupPolicy = CleanupPolicy.PREFIX
    marker: str = DEFAULT_MARKER
    owned_dir: str = DEFAULT_OWNED_DIR
    kinds: tuple[ArtifactKind, ...] = tuple(ArtifactKind)
    standalone_only: tuple[ArtifactKind, ...] = ()
    legacy_paths: tuple[str, ...] = ()  # relative to the project dir
    write_index: bool = False
    strip_frontmatter: bool = True

    @property
    def is_user_level(self) -> bool:
        """True if output goes under the home directory, not the project."""
        return self.install_dir.startswith("~")

    def resolve_install_dir(self, project_dir: Path) -> Path:
        """Directory the cleanup policy scans."""
        if self.is_user_level:
            return Path(self.install_dir).expanduser()
        return project_dir / self.install_dir

    def destination_root(self, project_dir: Path) -> Path:
        """Directory rendered paths are relative to."""
        install_dir = self.resolve_install_dir(project_dir)
        if self.naming == NamingStrategy.NESTED:
            return install_dir / self.owned_dir
        return install_dir

    def accepts(self, kind: ArtifactKind) -> bool:
        return kind in self.kinds
