"""
Bundle configuration model — the canonical in-memory config.

Both config dialects (TOML and YAML) load into this one model. It is
frozen: the pipeline reads it and never mutates it.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from boxwine.core.paths import DRIVE_MARKER, drive_relative, is_drive_path, normalize_windows_path

PORTABLE_WINE_URL = (
    "https://dl.winehq.org/wine-builds/macosx/pool/"
    "portable-winehq-{branch}-{version}-osx{arch}.tar.gz"
)

# Components Wine would otherwise install on prefix creation
MONO_DLL = "mscoree"
GECKO_DLL = "mshtml"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class RunSpec(_Frozen):
    """A program to run in the prefix.

    ``program`` is a host path, a ``c:/`` path inside the prefix, or a
    path starting with ``$WINEPREFIX``. ``args`` are passed verbatim.
    """

    program: str = ""
    args: list[str] | None = None

    @property
    def arguments(self) -> list[str]:
        return list(self.args or [])


class Volume(_Frozen):
    """A file or folder copied into the prefix.

    ``source`` (``from`` in config files) may be a host path or a
    ``c:/`` path. ``to`` must be a ``c:/`` path.
    """

    source: str = Field(alias="from")
    to: str
    post_install: bool = False

    @field_validator("to")
    @classmethod
    def _to_must_be_drive_path(cls, value: str) -> str:
        if not is_drive_path(value):
            raise ValueError(
                f"volume destination must begin with {DRIVE_MARKER!r}, got {value!r}"
            )
        drive_relative(value)  # rejects ".." segments
        return normalize_windows_path(value)

    @field_validator("source")
    @classmethod
    def _normalize_source(cls, value: str) -> str:
        if is_drive_path(value):
            drive_relative(value)
            return normalize_windows_path(value)
        return value


class BuildSpec(_Frozen):
    """Which portable Wine build to download."""

    branch: str = "stable"
    version: str = "5.0"
    arch: str = "64"


class PrefixSpec(_Frozen):
    """How the Wine prefix is created and finished."""

    prefix_arch: str = "win64"     # ignored when base_prefix is set
    base_prefix: str | None = None
    sandbox: bool = True
    install_mono: bool = False
    install_gecko: bool = False
    delete_installers: bool = True
    compress_wineprefix: bool = True


class WineSpec(_Frozen):
    build: BuildSpec = Field(default_factory=BuildSpec)
    prefix: PrefixSpec = Field(default_factory=PrefixSpec)
    volumes: list[Volume] = Field(default_factory=list, alias="volume")
    runs: list[RunSpec] = Field(default_factory=list, alias="run")


class AppSpec(_Frozen):
    name: str = "My App"
    icon: str | None = None
    entrypoint: RunSpec = Field(default_factory=RunSpec)


class WinetricksSpec(_Frozen):
    verbs: list[str] = Field(default_factory=list)
    bundle: bool = False           # copy winetricks into the app


class BundleConfig(_Frozen):
    """Root configuration — everything the build pipeline needs.

    Constructed once by the config loader and treated as read-only
    for the whole pipeline run.
    """

    app: AppSpec = Field(default_factory=AppSpec)
    wine: WineSpec = Field(default_factory=WineSpec)
    winetricks: WinetricksSpec = Field(default_factory=WinetricksSpec)

    @property
    def portable_wine_url(self) -> str:
        """Download URL of the portable WineHQ build."""
        build = self.wine.build
        return PORTABLE_WINE_URL.format(
            branch=build.branch, version=build.version, arch=build.arch,
        )

    @property
    def dll_overrides(self) -> str:
        """WINEDLLOVERRIDES value disabling the components not requested.

        Always terminated with ``=``: both disabled gives
        ``"mscoree,mshtml="``, both enabled gives ``"="``.
        """
        overrides: list[str] = []
        if not self.wine.prefix.install_mono:
            overrides.append(MONO_DLL)
        if not self.wine.prefix.install_gecko:
            overrides.append(GECKO_DLL)
        return f"{','.join(overrides)}="

    @property
    def verbs(self) -> list[str]:
        return list(self.winetricks.verbs)

    @property
    def sandbox(self) -> bool:
        return self.wine.prefix.sandbox

    @property
    def base_prefix(self) -> str | None:
        return self.wine.prefix.base_prefix

    @property
    def compress_prefix(self) -> bool:
        return self.wine.prefix.compress_wineprefix

    def pre_install_volumes(self) -> list[Volume]:
        """Volumes copied before the run programs execute."""
        return [v for v in self.wine.volumes if not v.post_install]

    def post_install_volumes(self) -> list[Volume]:
        """Volumes copied after the run programs execute."""
        return [v for v in self.wine.volumes if v.post_install]
