"""Tests for template rendering and the skeleton file plan.

Covers:
- TemplateRenderer (render, strict undefined, trailing newline)
- SkeletonTemplates paths for every role
- Rendered content of the expect/actual sources and their tests
- Android manifest and resources
"""

from __future__ import annotations

import re
from pathlib import PurePosixPath

import pytest
from jinja2 import UndefinedError

from kmp_scaffold.config import BuildSettings, ModuleConfiguration
from kmp_scaffold.scaffolder.templates import (
    FileRole,
    FileSpec,
    SkeletonTemplates,
    TemplateRenderer,
)


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def specs(default_config) -> dict[FileRole, FileSpec]:
    return {s.role: s for s in SkeletonTemplates().render_file_specs(default_config)}


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TestTemplateRenderer:
    def test_render_named_template(self, tmp_path):
        (tmp_path / "preset.j2").write_text("fromPreset({{ p }})", encoding="utf-8")
        assert TemplateRenderer(tmp_path).render("preset.j2", {"p": "x"}) == "fromPreset(x)"

    def test_undefined_variable_raises(self, tmp_path):
        (tmp_path / "missing.j2").write_text("{{ missing }}", encoding="utf-8")
        with pytest.raises(UndefinedError):
            TemplateRenderer(tmp_path).render("missing.j2", {})

    def test_undefined_context_key_in_bundled_template_raises(self, renderer):
        with pytest.raises(UndefinedError):
            renderer.render("common/Sample.kt.j2", {})

    def test_kotlin_string_template_survives(self, tmp_path):
        (tmp_path / "hello.kt.j2").write_text('"${Platform.name}"', encoding="utf-8")
        assert TemplateRenderer(tmp_path).render("hello.kt.j2", {}) == '"${Platform.name}"'

    def test_keeps_trailing_newline(self, tmp_path):
        (tmp_path / "line.j2").write_text("sdk.dir={{ d }}\n", encoding="utf-8")
        assert TemplateRenderer(tmp_path).render("line.j2", {"d": "/sdk"}) == "sdk.dir=/sdk\n"


# ---------------------------------------------------------------------------
# File plan
# ---------------------------------------------------------------------------


class TestSkeletonTemplates:
    def test_one_spec_per_role_in_order(self, default_config):
        specs = SkeletonTemplates().render_file_specs(default_config)
        assert [s.role for s in specs] == list(FileRole)

    def test_default_paths(self, specs):
        paths = {role: spec.path.as_posix() for role, spec in specs.items()}
        assert paths == {
            FileRole.COMMON_ENTRY: "src/commonMain/Sample.kt",
            FileRole.COMMON_TEST: "src/commonTest/SampleTests.kt",
            FileRole.PLATFORM_ENTRY: "src/main/Sample.kt",
            FileRole.PLATFORM_TEST: "src/test/SampleTestsAndroid.kt",
            FileRole.NATIVE_ENTRY: "src/iosMain/Sample.kt",
            FileRole.NATIVE_TEST: "src/iosTest/SampleTestsIOS.kt",
            FileRole.LOCAL_PROPERTIES: "local.properties",
            FileRole.PLATFORM_MANIFEST: "src/main/AndroidManifest.xml",
            FileRole.PLATFORM_STRINGS: "src/main/res/values/strings.xml",
            FileRole.PLATFORM_STYLES: "src/main/res/values/styles.xml",
        }

    def test_custom_paths(self, custom_config):
        specs = SkeletonTemplates().render_file_specs(custom_config)
        dirs = {s.path.parent.as_posix() for s in specs}
        assert "src/tvMain" in dirs
        assert "src/tvTest" in dirs
        assert "src/main" in dirs
        assert "src/test" in dirs
        assert not any("watch" in d for d in dirs)

    def test_paths_are_relative(self, specs):
        for spec in specs.values():
            assert isinstance(spec.path, PurePosixPath)
            assert not spec.path.is_absolute()

    def test_rendering_is_deterministic(self, default_config):
        first = SkeletonTemplates().render_file_specs(default_config)
        second = SkeletonTemplates().render_file_specs(default_config)
        assert first == second

    def test_uses_injected_renderer(self, default_config, tmp_path):
        for name in SkeletonTemplates._TEMPLATES.values():
            target = tmp_path / name
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(f"stub {name}\n", encoding="utf-8")
        specs = SkeletonTemplates(TemplateRenderer(tmp_path)).render_file_specs(default_config)
        assert specs[0].content == "stub common/Sample.kt.j2\n"


# ---------------------------------------------------------------------------
# Rendered sources
# ---------------------------------------------------------------------------


def _platform_name(source: str) -> str:
    match = re.search(r'actual val name: String = "([^"]+)"', source)
    assert match, source
    return match.group(1)


def _check_value(source: str) -> int:
    match = re.search(r"actual fun checkMe\(\) = (\d+)", source)
    assert match, source
    return int(match.group(1))


def _hello_greeting(common_source: str, platform: str) -> str:
    match = re.search(r'fun hello\(\): String = "([^"]*)"', common_source)
    assert match, common_source
    return match.group(1).replace("${Platform.name}", platform)


class TestSourceContent:
    def test_common_declares_expectations(self, specs):
        content = specs[FileRole.COMMON_ENTRY].content
        assert content.startswith("package sample\n")
        assert "expect class Sample() {" in content
        assert "fun checkMe(): Int" in content
        assert "expect object Platform {" in content
        assert 'fun hello(): String = "Hello from ${Platform.name}"' in content
        assert "println(hello())" in content

    def test_platform_fulfils_expectations(self, specs):
        content = specs[FileRole.PLATFORM_ENTRY].content
        assert "actual class Sample" in content
        assert _check_value(content) == 44
        assert _platform_name(content) == "Android"

    def test_platform_has_activity_stub(self, specs):
        content = specs[FileRole.PLATFORM_ENTRY].content
        assert "class MainActivity : AppCompatActivity()" in content
        assert "super.onCreate(savedInstanceState)" in content
        assert "testMe()" in content
        assert "setContentView(R.layout.activity_main)" in content

    def test_native_fulfils_expectations(self, specs):
        content = specs[FileRole.NATIVE_ENTRY].content
        assert _check_value(content) == 7
        assert _platform_name(content) == "iOS"
        assert "MainActivity" not in content

    def test_common_test_satisfied(self, specs):
        assert "assertTrue(Sample().checkMe() > 0)" in specs[FileRole.COMMON_TEST].content
        assert _check_value(specs[FileRole.PLATFORM_ENTRY].content) > 0
        assert _check_value(specs[FileRole.NATIVE_ENTRY].content) > 0

    @pytest.mark.parametrize(
        "test_role,entry_role,class_name",
        [
            (FileRole.PLATFORM_TEST, FileRole.PLATFORM_ENTRY, "SampleTestsAndroid"),
            (FileRole.NATIVE_TEST, FileRole.NATIVE_ENTRY, "SampleTestsIOS"),
        ],
    )
    def test_platform_tests_satisfied(self, specs, test_role, entry_role, class_name):
        test_source = specs[test_role].content
        platform = _platform_name(specs[entry_role].content)
        assert f"class {class_name} {{" in test_source
        assert f'assertTrue("{platform}" in hello())' in test_source
        greeting = _hello_greeting(specs[FileRole.COMMON_ENTRY].content, platform)
        assert greeting.startswith("Hello from ")
        assert platform in greeting

    def test_tests_import_kotlin_test(self, specs):
        for role in (FileRole.COMMON_TEST, FileRole.PLATFORM_TEST, FileRole.NATIVE_TEST):
            content = specs[role].content
            assert "import kotlin.test.Test" in content
            assert "import kotlin.test.assertTrue" in content

    def test_custom_package_name(self, default_config):
        settings = BuildSettings(package_name="com.example.shared")
        specs = SkeletonTemplates().render_file_specs(default_config, settings)
        for spec in specs:
            if spec.path.suffix == ".kt":
                assert spec.content.startswith("package com.example.shared\n")


# ---------------------------------------------------------------------------
# Android resources
# ---------------------------------------------------------------------------


class TestAndroidResources:
    def test_manifest(self, specs):
        content = specs[FileRole.PLATFORM_MANIFEST].content
        assert content.startswith('<?xml version="1.0" encoding="utf-8"?>')
        assert 'package="sample"' in content
        assert 'android:theme="@style/AppTheme"' in content
        assert '<activity android:name="sample.MainActivity">' in content
        assert "android.intent.category.LAUNCHER" in content

    def test_strings(self, specs):
        assert '<string name="app_name">android-app</string>' in specs[FileRole.PLATFORM_STRINGS].content

    def test_styles(self, specs):
        content = specs[FileRole.PLATFORM_STYLES].content
        assert '<style name="AppTheme" parent="Theme.AppCompat.Light.DarkActionBar">' in content

    def test_local_properties(self, specs):
        content = specs[FileRole.LOCAL_PROPERTIES].content
        assert content.startswith("## This file must *NOT* be checked into Version Control Systems,")
        assert content.rstrip().endswith("sdk.dir=PleaseSpecifyAndroidSdkPathHere")

    def test_local_properties_sdk_dir(self):
        settings = BuildSettings(sdk_dir="/opt/android-sdk", app_name="Demo")
        specs = {
            s.role: s
            for s in SkeletonTemplates().render_file_specs(ModuleConfiguration(), settings)
        }
        assert "sdk.dir=/opt/android-sdk" in specs[FileRole.LOCAL_PROPERTIES].content
        assert ">Demo<" in specs[FileRole.PLATFORM_STRINGS].content
