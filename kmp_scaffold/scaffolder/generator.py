"""Main scaffolding orchestrator.

Takes a ``ModuleConfiguration`` and materialises the multiplatform skeleton
(common, Android and iOS source sets plus the Android manifest, resources and
``local.properties``) under a root directory.
"""

from __future__ import annotations

from contextlib import ExitStack
from pathlib import Path, PurePosixPath
from typing import TextIO

from kmp_scaffold.config import BuildSettings, ModuleConfiguration
from kmp_scaffold.utils import console

from .errors import ScaffoldExistsError, ScaffoldIOError
from .templates import FileSpec, SkeletonTemplates, TemplateRenderer


class ProjectSkeletonGenerator:
    """Writes the skeleton for one ``ModuleConfiguration``.

    Every directory and file is created with an exclusive create, so running
    the generator against a root that already holds a skeleton fails with
    ``ScaffoldExistsError`` instead of overwriting anything.  All write
    handles are released on every exit path; directories and files already
    created before a failure are left in place.
    """

    def __init__(
        self,
        config: ModuleConfiguration,
        settings: BuildSettings | None = None,
        renderer: TemplateRenderer | None = None,
        *,
        verbose: bool = False,
    ) -> None:
        self.config = config
        self.settings = settings or BuildSettings()
        self.templates = SkeletonTemplates(renderer)
        self.verbose = verbose

    # -- Public API --------------------------------------------------------

    def file_specs(self) -> list[FileSpec]:
        """Return the files the skeleton consists of, in write order."""
        return self.templates.render_file_specs(self.config, self.settings)

    def generate(self, root: str | Path) -> list[Path]:
        """Generate the skeleton under *root*.

        Args:
            root: Module root directory.  Created if missing; an existing
                empty directory is the normal case.

        Returns:
            Paths of the written files, in write order.

        Raises:
            ScaffoldExistsError: A directory or file of the skeleton already
                exists under *root*.
            ScaffoldIOError: The file system rejected a create, write or
                close.
        """
        root = Path(root)
        specs = self.file_specs()
        try:
            root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ScaffoldIOError(root, f"cannot create module root ({exc})") from exc

        created_dirs: set[PurePosixPath] = set()
        written: list[Path] = []
        current = root
        try:
            with ExitStack() as handles:
                for spec in specs:
                    for parent in reversed(spec.path.parents[:-1]):
                        if parent not in created_dirs:
                            current = root / parent
                            self._make_dir(current)
                            created_dirs.add(parent)

                    current = root / spec.path
                    writer = self._open_writer(current)
                    handles.callback(self._close_writer, current, writer)
                    writer.write(spec.content)
                    written.append(current)
                    if self.verbose:
                        console.log(f"[dim]created[/dim] {spec.path}")
        except FileExistsError as exc:
            raise ScaffoldExistsError(current, "already exists") from exc
        except OSError as exc:
            raise ScaffoldIOError(current, str(exc)) from exc
        except UnicodeError as exc:
            raise ScaffoldIOError(current, f"cannot encode content ({exc})") from exc
        return written

    # -- File-system primitives --------------------------------------------

    def _make_dir(self, path: Path) -> None:
        path.mkdir()

    def _open_writer(self, path: Path) -> TextIO:
        return path.open("x", encoding="utf-8")

    def _close_writer(self, path: Path, writer: TextIO) -> None:
        try:
            writer.close()
        except OSError as exc:
            raise ScaffoldIOError(path, f"close failed ({exc})") from exc
        except UnicodeError as exc:
            raise ScaffoldIOError(path, f"cannot encode content ({exc})") from exc


def create_project_skeleton(
    root: str | Path,
    config: ModuleConfiguration | None = None,
    settings: BuildSettings | None = None,
) -> list[Path]:
    """Generate the skeleton for *config* (defaults: common/android/ios) under *root*."""
    generator = ProjectSkeletonGenerator(config or ModuleConfiguration(), settings)
    return generator.generate(root)
