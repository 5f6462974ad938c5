"""KMP Scaffold scaffolder -- generates Kotlin multiplatform module skeletons.

This module takes a ``ModuleConfiguration`` and renders a common/Android/iOS
module: ``expect``/``actual`` sample sources and tests for every source set,
the Android manifest and resources, ``local.properties`` and the Gradle
fragment that binds the targets to their presets.

Quick usage::

    from kmp_scaffold.config import ModuleConfiguration
    from kmp_scaffold.scaffolder import ProjectSkeletonGenerator, build_multiplatform_part

    config = ModuleConfiguration(jvm_target_name="android", native_target_name="ios")
    ProjectSkeletonGenerator(config).generate("/tmp/my-module")
    fragment = build_multiplatform_part(config)
"""

from kmp_scaffold.scaffolder.build_fragment import build_multiplatform_part
from kmp_scaffold.scaffolder.errors import (
    ScaffoldError,
    ScaffoldExistsError,
    ScaffoldIOError,
)
from kmp_scaffold.scaffolder.generator import (
    ProjectSkeletonGenerator,
    create_project_skeleton,
)
from kmp_scaffold.scaffolder.naming import SourceSetNames, resolve_source_set_names
from kmp_scaffold.scaffolder.templates import (
    FileRole,
    FileSpec,
    SkeletonTemplates,
    TemplateRenderer,
)

__all__ = [
    "FileRole",
    "FileSpec",
    "ProjectSkeletonGenerator",
    "ScaffoldError",
    "ScaffoldExistsError",
    "ScaffoldIOError",
    "SkeletonTemplates",
    "SourceSetNames",
    "TemplateRenderer",
    "build_multiplatform_part",
    "create_project_skeleton",
    "resolve_source_set_names",
]
