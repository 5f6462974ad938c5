"""Shared pytest fixtures for the KMP Scaffold test suite.

Provides reusable fixtures for:
- Temporary module roots
- Default and custom-named module configurations
- Build settings
- The expected default file layout
"""

from __future__ import annotations

from pathlib import Path

import pytest

from kmp_scaffold.config import BuildSettings, ModuleConfiguration


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def module_root(tmp_path: Path) -> Path:
    """Empty module root directory (auto-cleanup)."""
    root = tmp_path / "mpp-module"
    root.mkdir()
    return root


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------

@pytest.fixture
def default_config() -> ModuleConfiguration:
    """common / android / ios."""
    return ModuleConfiguration()


@pytest.fixture
def custom_config() -> ModuleConfiguration:
    """A configuration with renamed targets (watch / tv)."""
    return ModuleConfiguration(jvm_target_name="watch", native_target_name="tv")


@pytest.fixture
def build_settings() -> BuildSettings:
    return BuildSettings()


# ---------------------------------------------------------------------------
# Expected layout
# ---------------------------------------------------------------------------

@pytest.fixture
def default_layout() -> set[str]:
    """Every file a default skeleton consists of, relative to the module root."""
    return {
        "src/commonMain/Sample.kt",
        "src/commonTest/SampleTests.kt",
        "src/main/Sample.kt",
        "src/main/AndroidManifest.xml",
        "src/main/res/values/strings.xml",
        "src/main/res/values/styles.xml",
        "src/test/SampleTestsAndroid.kt",
        "src/iosMain/Sample.kt",
        "src/iosTest/SampleTestsIOS.kt",
        "local.properties",
    }


@pytest.fixture
def list_files():
    """Return a helper listing every regular file under a root as POSIX relative paths."""

    def _list(root: Path) -> set[str]:
        return {p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file()}

    return _list
