"""Gradle build-fragment generation for the multiplatform module.

Produces the ``android { ... }`` / ``dependencies { ... }`` / ``kotlin { ... }``
part of ``build.gradle``.  The fragment is plain text handed to whoever owns
the surrounding build script; it is never parsed here.
"""

from __future__ import annotations

from typing import Any

from kmp_scaffold.config import BuildSettings, ModuleConfiguration

from .naming import resolve_source_set_names
from .templates import TemplateRenderer, build_context

PLATFORM_PRESET = "android"
NATIVE_PRESET = "iosX64"

SHARED_LIBRARY = "org.jetbrains.kotlin:kotlin-stdlib"

PLATFORM_DEPENDENCIES: tuple[str, ...] = (
    "implementation 'com.android.support:appcompat-v7:28.0.0-rc02'",
    "implementation 'com.android.support.constraint:constraint-layout:1.1.3'",
    "testImplementation 'junit:junit:4.12'",
    "androidTestImplementation 'com.android.support.test:runner:1.0.2'",
)

COMMON_MAIN_DEPENDENCIES: tuple[str, ...] = ("org.jetbrains.kotlin:kotlin-stdlib-common",)
COMMON_TEST_DEPENDENCIES: tuple[str, ...] = (
    "org.jetbrains.kotlin:kotlin-test-common",
    "org.jetbrains.kotlin:kotlin-test-annotations-common",
)


def source_set_dependencies(config: ModuleConfiguration) -> dict[str, list[str]]:
    """Map each source set declared in the fragment to its library notations.

    Only the common and native source sets appear; the Android plugin
    configures ``main``/``test`` itself.
    """
    names = resolve_source_set_names(config)
    return {
        names.common_main: list(COMMON_MAIN_DEPENDENCIES),
        names.common_test: list(COMMON_TEST_DEPENDENCIES),
        names.native_main: [],
        names.native_test: [],
    }


def build_multiplatform_part(
    config: ModuleConfiguration,
    settings: BuildSettings | None = None,
    renderer: TemplateRenderer | None = None,
) -> str:
    """Return the Gradle fragment wiring the Android and iOS targets together."""
    settings = settings or BuildSettings()
    renderer = renderer or TemplateRenderer()
    context: dict[str, Any] = {
        **build_context(config, settings),
        "platform_dependencies": PLATFORM_DEPENDENCIES,
        "shared_library": SHARED_LIBRARY,
        "platform_preset": PLATFORM_PRESET,
        "native_preset": NATIVE_PRESET,
        "source_set_dependencies": source_set_dependencies(config),
    }
    return renderer.render("build_fragment.gradle.j2", context)
