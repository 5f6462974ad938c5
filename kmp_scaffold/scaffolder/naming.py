"""Source-set naming for the common, Android and iOS targets."""

from __future__ import annotations

from dataclasses import astuple, dataclass, fields
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kmp_scaffold.config import ModuleConfiguration


@dataclass(frozen=True)
class SourceSetNames:
    """The six canonical source-set names of one module, in generation order."""

    common_main: str
    common_test: str
    platform_main: str
    platform_test: str
    native_main: str
    native_test: str

    def all(self) -> list[str]:
        return list(astuple(self))

    def as_dict(self) -> dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def resolve_source_set_names(config: ModuleConfiguration) -> SourceSetNames:
    """Derive the source-set names for *config*.

    Common and native source sets are ``<base><Suffix>`` (``commonMain``,
    ``iosTest``).  The Android plugin owns the JVM/mobile source sets, which
    are always the bare lower-cased suffix (``main``, ``test``) whatever the
    target is called.
    """
    return SourceSetNames(
        common_main=f"{config.common_name}{config.production_suffix}",
        common_test=f"{config.common_name}{config.test_suffix}",
        platform_main=config.production_suffix.lower(),
        platform_test=config.test_suffix.lower(),
        native_main=f"{config.native_target_name}{config.production_suffix}",
        native_test=f"{config.native_target_name}{config.test_suffix}",
    )
