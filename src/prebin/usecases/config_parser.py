"""Config parser use case for prebin."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from prebin.domain.exceptions import PrebinConfigError
from prebin.domain.metadata import PkgOverride
from prebin.domain.settings import DEFAULT_REGISTRY_URL, ResolverSettings


class ConfigParser:
    """Parses prebin YAML configuration to settings.

    Recognised keys (all optional)::

        install_path: ~/.local/bin
        targets: [x86_64-unknown-linux-musl]
        no_symlinks: false
        registry_url: https://crates.io/api/v1
        timeout_seconds: 30
        overrides:
          pkg-url: "{ repo }/releases/download/v{ version }/{ name }-{ target }.tgz"
          pkg-fmt: tgz
          bin-dir: "{ bin }{ binary-ext }"
    """

    def __init__(self, default_install_path: Path) -> None:
        """Initialize the parser.

        Args:
            default_install_path: Used when the config sets no install_path.
        """
        self._default_install_path = default_install_path

    def parse(self, yaml_str: str) -> ResolverSettings:
        """Parse YAML config to settings.

        Args:
            yaml_str: YAML document; an empty document yields defaults.

        Returns:
            ResolverSettings domain object

        Raises:
            PrebinConfigError: If YAML is invalid or a field has the wrong type
        """
        try:
            config = yaml.safe_load(yaml_str)
        except yaml.YAMLError as e:
            raise PrebinConfigError(f"Invalid YAML: {e}") from e

        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise PrebinConfigError("Config must be a dictionary")

        unknown = set(config) - {
            "install_path",
            "targets",
            "no_symlinks",
            "registry_url",
            "timeout_seconds",
            "overrides",
        }
        if unknown:
            raise PrebinConfigError(f"Unknown config keys: {', '.join(sorted(unknown))}")

        install_path = config.get("install_path")
        if install_path is not None and not isinstance(install_path, str):
            raise PrebinConfigError("install_path must be a string")

        targets = config.get("targets", [])
        if isinstance(targets, str):
            targets = [targets]
        if not isinstance(targets, list) or not all(isinstance(t, str) for t in targets):
            raise PrebinConfigError("targets must be a list of strings")

        no_symlinks = config.get("no_symlinks", False)
        if not isinstance(no_symlinks, bool):
            raise PrebinConfigError("no_symlinks must be a boolean")

        timeout = config.get("timeout_seconds", 30.0)
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
            raise PrebinConfigError("timeout_seconds must be a number")

        registry_url = config.get("registry_url", DEFAULT_REGISTRY_URL)
        if not isinstance(registry_url, str):
            raise PrebinConfigError("registry_url must be a string")

        return ResolverSettings(
            install_path=(
                Path(install_path).expanduser()
                if install_path is not None
                else self._default_install_path
            ),
            targets=tuple(targets),
            no_symlinks=no_symlinks,
            registry_url=registry_url,
            timeout_seconds=float(timeout),
            cli_overrides=self._parse_overrides(config.get("overrides", {})),
        )

    def _parse_overrides(self, overrides: Any) -> PkgOverride:
        if overrides is None:
            return PkgOverride()
        if not isinstance(overrides, Mapping):
            raise PrebinConfigError("overrides must be a dictionary")
        return PkgOverride.from_mapping(overrides)
