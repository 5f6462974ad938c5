"""Jinja2 template rendering for the multiplatform skeleton.

Provides the ``TemplateRenderer`` class, which loads Jinja2 templates from the
``kmp_scaffold/scaffolder/templates/`` directory, and ``SkeletonTemplates``,
which maps every logical file of the skeleton to its template and to its
location under the scaffold root.  Rendering is pure: the resulting
``FileSpec`` list depends only on the configuration, never on the state of the
file system.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from kmp_scaffold.config import BuildSettings, ModuleConfiguration

from .naming import SourceSetNames, resolve_source_set_names


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

SOURCE_ROOT = "src"
ENTRY_FILE_NAME = "Sample.kt"


# ---------------------------------------------------------------------------
# File roles
# ---------------------------------------------------------------------------


class FileRole(str, Enum):
    """Logical files of the skeleton, in the order they are written."""
    COMMON_ENTRY = "common_entry"
    COMMON_TEST = "common_test"
    PLATFORM_ENTRY = "platform_entry"
    PLATFORM_TEST = "platform_test"
    NATIVE_ENTRY = "native_entry"
    NATIVE_TEST = "native_test"
    LOCAL_PROPERTIES = "local_properties"
    PLATFORM_MANIFEST = "platform_manifest"
    PLATFORM_STRINGS = "platform_strings"
    PLATFORM_STYLES = "platform_styles"


@dataclass(frozen=True)
class FileSpec:
    """One file to materialise, relative to the scaffold root."""

    role: FileRole
    path: PurePosixPath
    content: str


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for the skeleton and the Gradle fragment.

    Undefined template variables raise instead of rendering as empty text, so
    a template/context mismatch cannot produce a silently broken file.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"common/Sample.kt.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)


# ---------------------------------------------------------------------------
# Skeleton template set
# ---------------------------------------------------------------------------


def build_context(
    config: ModuleConfiguration, settings: BuildSettings
) -> dict[str, Any]:
    """Build the Jinja2 template context shared by every skeleton template."""
    names = resolve_source_set_names(config)
    return {
        "config": config,
        "settings": settings,
        "names": names,
        "package_name": settings.package_name,
    }


class SkeletonTemplates:
    """Maps each ``FileRole`` to a template and a path under the scaffold root."""

    # Role -> template name
    _TEMPLATES: dict[FileRole, str] = {
        FileRole.COMMON_ENTRY: "common/Sample.kt.j2",
        FileRole.COMMON_TEST: "common/SampleTests.kt.j2",
        FileRole.PLATFORM_ENTRY: "android/Sample.kt.j2",
        FileRole.PLATFORM_TEST: "android/SampleTestsAndroid.kt.j2",
        FileRole.NATIVE_ENTRY: "ios/Sample.kt.j2",
        FileRole.NATIVE_TEST: "ios/SampleTestsIOS.kt.j2",
        FileRole.LOCAL_PROPERTIES: "android/local.properties.j2",
        FileRole.PLATFORM_MANIFEST: "android/AndroidManifest.xml.j2",
        FileRole.PLATFORM_STRINGS: "android/strings.xml.j2",
        FileRole.PLATFORM_STYLES: "android/styles.xml.j2",
    }

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    @staticmethod
    def path_for(role: FileRole, names: SourceSetNames) -> PurePosixPath:
        """Return the location of *role* relative to the scaffold root."""
        src = PurePosixPath(SOURCE_ROOT)
        platform_root = src / names.platform_main
        paths = {
            FileRole.COMMON_ENTRY: src / names.common_main / ENTRY_FILE_NAME,
            FileRole.COMMON_TEST: src / names.common_test / "SampleTests.kt",
            FileRole.PLATFORM_ENTRY: platform_root / ENTRY_FILE_NAME,
            FileRole.PLATFORM_TEST: src / names.platform_test / "SampleTestsAndroid.kt",
            FileRole.NATIVE_ENTRY: src / names.native_main / ENTRY_FILE_NAME,
            FileRole.NATIVE_TEST: src / names.native_test / "SampleTestsIOS.kt",
            FileRole.LOCAL_PROPERTIES: PurePosixPath("local.properties"),
            FileRole.PLATFORM_MANIFEST: platform_root / "AndroidManifest.xml",
            FileRole.PLATFORM_STRINGS: platform_root / "res" / "values" / "strings.xml",
            FileRole.PLATFORM_STYLES: platform_root / "res" / "values" / "styles.xml",
        }
        return paths[role]

    def render_file_specs(
        self,
        config: ModuleConfiguration,
        settings: BuildSettings | None = None,
    ) -> list[FileSpec]:
        """Render every skeleton file for *config*, in ``FileRole`` order."""
        settings = settings or BuildSettings()
        context = build_context(config, settings)
        names: SourceSetNames = context["names"]
        return [
            FileSpec(
                role=role,
                path=self.path_for(role, names),
                content=self.renderer.render(self._TEMPLATES[role], context),
            )
            for role in FileRole
        ]
