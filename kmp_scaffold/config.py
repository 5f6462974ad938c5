"""KMP Scaffold configuration.

Typed configuration for the scaffold generator. ``ModuleConfiguration`` holds
the target and source-set naming inputs; ``BuildSettings`` holds the Android
build parameters substituted into the templates and the Gradle fragment. Both
are Pydantic v2 models so they are validated at construction time and can be
serialised to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Gradle source-set and target names end up as DSL identifiers.
_IDENTIFIER_PATTERN = r"^[A-Za-z][A-Za-z0-9_]*$"

PRODUCTION_SUFFIX = "Main"
TEST_SUFFIX = "Test"


class ModuleConfiguration(BaseModel):
    """Naming inputs for one multiplatform module.

    Frozen: a configuration cannot change once generation has started.
    """

    model_config = ConfigDict(frozen=True)

    common_name: str = Field(default="common", pattern=_IDENTIFIER_PATTERN)
    jvm_target_name: str = Field(
        default="android",
        pattern=_IDENTIFIER_PATTERN,
        description="Name bound to the Android (JVM/mobile) preset",
    )
    native_target_name: str = Field(
        default="ios",
        pattern=_IDENTIFIER_PATTERN,
        description="Name bound to the iOS (native) preset",
    )
    production_suffix: str = Field(default=PRODUCTION_SUFFIX, pattern=_IDENTIFIER_PATTERN)
    test_suffix: str = Field(default=TEST_SUFFIX, pattern=_IDENTIFIER_PATTERN)

    @model_validator(mode="after")
    def _check_distinct_names(self) -> "ModuleConfiguration":
        bases = {
            "common_name": self.common_name,
            "jvm_target_name": self.jvm_target_name,
            "native_target_name": self.native_target_name,
        }
        seen: dict[str, str] = {}
        for field_name, value in bases.items():
            if value in seen:
                raise ValueError(
                    f"{seen[value]} and {field_name} must differ (both {value!r})"
                )
            seen[value] = field_name
        if self.production_suffix.lower() == self.test_suffix.lower():
            raise ValueError(
                "production_suffix and test_suffix must differ ignoring case "
                f"(got {self.production_suffix!r} and {self.test_suffix!r})"
            )

        from kmp_scaffold.scaffolder.naming import resolve_source_set_names

        names = resolve_source_set_names(self).all()
        if len(set(names)) != len(names):
            raise ValueError(f"derived source-set names collide: {names}")
        return self


class BuildSettings(BaseModel):
    """Android build parameters for the generated module.

    Defaults match the Android Gradle plugin 3.2 toolchain the templates were
    written against.
    """

    compile_sdk_version: int = Field(default=28, ge=1)
    min_sdk_version: int = Field(default=15, ge=1)
    target_sdk_version: int = Field(default=28, ge=1)
    application_id: str = Field(default="org.jetbrains.kotlin.mpp_app_android")
    version_code: int = Field(default=1, ge=1)
    version_name: str = Field(default="1.0")
    instrumentation_runner: str = Field(
        default="android.support.test.runner.AndroidJUnitRunner"
    )
    android_gradle_plugin: str = Field(
        default="com.android.tools.build:gradle:3.2.0-beta03",
        description="Buildscript classpath notation for the Android Gradle plugin",
    )
    kotlin_version: str = Field(default="1.3.0")
    app_name: str = Field(default="android-app")
    sdk_dir: str = Field(
        default="PleaseSpecifyAndroidSdkPathHere",
        description="Value written to sdk.dir in local.properties",
    )
    package_name: str = Field(default="sample", pattern=r"^[a-z][a-z0-9_]*(\.[a-z][a-z0-9_]*)*$")

    @model_validator(mode="after")
    def _check_sdk_bounds(self) -> "BuildSettings":
        if not (self.min_sdk_version <= self.target_sdk_version <= self.compile_sdk_version):
            raise ValueError(
                "expected min_sdk_version <= target_sdk_version <= compile_sdk_version, got "
                f"{self.min_sdk_version}/{self.target_sdk_version}/{self.compile_sdk_version}"
            )
        return self

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the settings to a JSON file and return the path written."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "BuildSettings":
        """Load previously-saved settings from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "BuildSettings":
        """Build ``BuildSettings`` from environment variables.

        Recognised variables (all optional):
            KMP_APPLICATION_ID, KMP_COMPILE_SDK_VERSION, KMP_MIN_SDK_VERSION,
            KMP_TARGET_SDK_VERSION, KMP_SDK_DIR, KMP_ANDROID_GRADLE_PLUGIN.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("KMP_APPLICATION_ID"):
            kwargs["application_id"] = os.environ["KMP_APPLICATION_ID"]
        if os.environ.get("KMP_COMPILE_SDK_VERSION"):
            kwargs["compile_sdk_version"] = int(os.environ["KMP_COMPILE_SDK_VERSION"])
        if os.environ.get("KMP_MIN_SDK_VERSION"):
            kwargs["min_sdk_version"] = int(os.environ["KMP_MIN_SDK_VERSION"])
        if os.environ.get("KMP_TARGET_SDK_VERSION"):
            kwargs["target_sdk_version"] = int(os.environ["KMP_TARGET_SDK_VERSION"])
        if os.environ.get("KMP_SDK_DIR"):
            kwargs["sdk_dir"] = os.environ["KMP_SDK_DIR"]
        if os.environ.get("KMP_ANDROID_GRADLE_PLUGIN"):
            kwargs["android_gradle_plugin"] = os.environ["KMP_ANDROID_GRADLE_PLUGIN"]
        return cls(**kwargs)
