"""Host-facing module builder for Kotlin mobile multiplatform projects.

The host wizard talks to a module builder through six methods: identity
(``get_builder_id``, ``get_presentable_name``, ``get_description``), build
script contributions (``setup_additional_dependencies``), skeleton creation
(``create_project_skeleton``) and the Gradle fragment
(``build_multiplatform_part``).  ``MobileMultiplatformModuleBuilder``
implements them by composing a ``ModuleConfiguration`` with the shared
scaffolder routines.

Usage::

    python -m kmp_scaffold ./my-module
    python -m kmp_scaffold ./my-module --jvm-target watch --native-target tv
    python -m kmp_scaffold ./my-module --print-fragment
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Protocol

from pydantic import ValidationError

from kmp_scaffold.config import BuildSettings, ModuleConfiguration
from kmp_scaffold.scaffolder import (
    ProjectSkeletonGenerator,
    ScaffoldError,
    TemplateRenderer,
    build_multiplatform_part,
)
from kmp_scaffold.utils import (
    console,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
    relative_display,
)

KOTLIN_MULTIPLATFORM_PLUGIN = "apply plugin: 'kotlin-multiplatform'"


# ---------------------------------------------------------------------------
# Build script contributions
# ---------------------------------------------------------------------------


class BuildScriptBuilder(Protocol):
    """The part of the host's build-script builder a module builder may touch."""

    def add_buildscript_dependency_notation(self, notation: str) -> Any: ...

    def add_buildscript_repositories_definition(self, definition: str) -> Any: ...

    def add_repositories_definition(self, definition: str) -> Any: ...


class BuildScriptData:
    """Collects build-script notations and renders a complete ``build.gradle``.

    Every notation is kept once, in the order it was first added.
    """

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()
        self.buildscript_dependencies: list[str] = []
        self.buildscript_repositories: list[str] = []
        self.plugins: list[str] = []
        self.repositories: list[str] = []

    def add_buildscript_dependency_notation(self, notation: str) -> "BuildScriptData":
        _append_once(self.buildscript_dependencies, notation)
        return self

    def add_buildscript_repositories_definition(self, definition: str) -> "BuildScriptData":
        _append_once(self.buildscript_repositories, definition)
        return self

    def add_plugin_definition(self, definition: str) -> "BuildScriptData":
        _append_once(self.plugins, definition)
        return self

    def add_repositories_definition(self, definition: str) -> "BuildScriptData":
        _append_once(self.repositories, definition)
        return self

    def build(self, body: str = "") -> str:
        """Render ``build.gradle`` with *body* (usually the multiplatform fragment) appended."""
        return self.renderer.render(
            "build.gradle.j2",
            {
                "buildscript_repositories": self.buildscript_repositories,
                "buildscript_dependencies": self.buildscript_dependencies,
                "plugins": self.plugins,
                "repositories": self.repositories,
                "body": body.strip(),
            },
        )


def _append_once(items: list[str], value: str) -> None:
    if value not in items:
        items.append(value)


# ---------------------------------------------------------------------------
# Module builders
# ---------------------------------------------------------------------------


class ModuleBuilder(Protocol):
    """Capability surface the host wizard relies on."""

    def get_builder_id(self) -> str: ...

    def get_presentable_name(self) -> str: ...

    def get_description(self) -> str: ...

    def setup_additional_dependencies(self, build_script: BuildScriptBuilder) -> None: ...

    def create_project_skeleton(self, root: str | Path, module: Any = None) -> list[Path]: ...

    def build_multiplatform_part(self) -> str: ...


class MobileMultiplatformModuleBuilder:
    """Module builder for a shared module targeting Android and iOS."""

    BUILDER_ID = "kotlin.gradle.multiplatform.mobile"
    PRESENTABLE_NAME = "Kotlin (Mobile Android/iOS)"
    DESCRIPTION = (
        "Multiplatform Gradle projects allow reusing the same Kotlin code "
        "between Android and iOS mobile platforms."
    )

    def __init__(
        self,
        config: ModuleConfiguration | None = None,
        settings: BuildSettings | None = None,
        *,
        verbose: bool = False,
    ) -> None:
        self.config = config or ModuleConfiguration()
        self.settings = settings or BuildSettings()
        self.verbose = verbose

    def get_builder_id(self) -> str:
        return self.BUILDER_ID

    def get_presentable_name(self) -> str:
        return self.PRESENTABLE_NAME

    def get_description(self) -> str:
        return self.DESCRIPTION

    def setup_additional_dependencies(self, build_script: BuildScriptBuilder) -> None:
        """Register the Android Gradle plugin and the Google repository."""
        build_script.add_buildscript_dependency_notation(
            f"classpath '{self.settings.android_gradle_plugin}'"
        )
        build_script.add_buildscript_repositories_definition("google()")
        build_script.add_repositories_definition("google()")

    def create_project_skeleton(self, root: str | Path, module: Any = None) -> list[Path]:
        """Write the skeleton under *root*.

        *module* is the host's project-model handle; it is accepted for the
        host contract and does not influence the generated files.
        """
        generator = ProjectSkeletonGenerator(
            self.config, self.settings, verbose=self.verbose
        )
        return generator.generate(root)

    def build_multiplatform_part(self) -> str:
        return build_multiplatform_part(self.config, self.settings)

    def build_script(self) -> str:
        """Return a complete ``build.gradle`` for the module.

        Stands in for the host's build-script assembler when the builder is
        driven from the command line.
        """
        data = BuildScriptData()
        data.add_buildscript_repositories_definition("mavenCentral()")
        data.add_buildscript_dependency_notation(
            f"classpath 'org.jetbrains.kotlin:kotlin-gradle-plugin:{self.settings.kotlin_version}'"
        )
        data.add_plugin_definition(KOTLIN_MULTIPLATFORM_PLUGIN)
        data.add_repositories_definition("mavenCentral()")
        self.setup_additional_dependencies(data)
        return data.build(self.build_multiplatform_part())


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``python -m kmp_scaffold``."""
    import argparse

    parser = argparse.ArgumentParser(
        description="KMP Scaffold -- Kotlin mobile multiplatform module generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m kmp_scaffold ./my-module\n"
            "  python -m kmp_scaffold ./my-module --jvm-target watch --native-target tv\n"
            "  python -m kmp_scaffold ./my-module --print-fragment\n"
        ),
    )

    parser.add_argument("root", help="Module root directory")
    parser.add_argument(
        "--common-name",
        default="common",
        help="Base name of the shared source sets (default: common)",
    )
    parser.add_argument(
        "--jvm-target",
        default="android",
        help="Name bound to the Android preset (default: android)",
    )
    parser.add_argument(
        "--native-target",
        default="ios",
        help="Name bound to the iOS preset (default: ios)",
    )
    parser.add_argument(
        "--application-id",
        default=None,
        help="Override the Android applicationId",
    )
    parser.add_argument(
        "--print-fragment",
        action="store_true",
        help="Print the Gradle fragment and exit without writing files",
    )
    parser.add_argument(
        "--no-build-file",
        action="store_true",
        help="Do not write build.gradle next to the skeleton",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every created file")

    args = parser.parse_args(argv)

    try:
        config = ModuleConfiguration(
            common_name=args.common_name,
            jvm_target_name=args.jvm_target,
            native_target_name=args.native_target,
        )
        settings = BuildSettings.from_env()
        if args.application_id:
            settings = BuildSettings.model_validate(
                {**settings.model_dump(), "application_id": args.application_id}
            )
    except (ValidationError, ValueError) as exc:
        console.print(f"[bold red]Error:[/bold red] Invalid configuration: {exc}")
        sys.exit(1)

    builder = MobileMultiplatformModuleBuilder(config, settings, verbose=args.verbose)

    if args.print_fragment:
        console.print(builder.build_multiplatform_part(), markup=False, highlight=False, soft_wrap=True)
        return

    root = Path(args.root)
    try:
        written = builder.create_project_skeleton(root)
        if not args.no_build_file:
            build_file = root / "build.gradle"
            with build_file.open("x", encoding="utf-8") as fh:
                fh.write(builder.build_script())
            written.append(build_file)
    except ScaffoldError as exc:
        print_error(f"Scaffolding failed: {exc}")
        sys.exit(1)
    except (OSError, UnicodeError) as exc:
        print_error(f"Could not write build.gradle: {exc}")
        sys.exit(1)

    print_summary_table(
        {relative_display(p, root): f"{p.stat().st_size} bytes" for p in written},
        title=f"{builder.get_presentable_name()} -- {root}",
    )
    if settings.sdk_dir == BuildSettings.model_fields["sdk_dir"].default:
        print_warning("local.properties: set sdk.dir to your Android SDK location")
    print_success(f"Generated {len(written)} files under {root}")


if __name__ == "__main__":
    main()
