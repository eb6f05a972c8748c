"""Command-line entry point: resolve a package and report the outcome."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import tempfile
from dataclasses import replace
from pathlib import Path

import httpx
import semantic_version

from prebin import __version__
from prebin.adapters.crates_io_registry import HttpxCratesIoRegistry
from prebin.adapters.install_path import default_install_path
from prebin.domain.exceptions import PrebinError
from prebin.domain.metadata import PkgFmt, PkgOverride
from prebin.domain.package import PackageReference
from prebin.domain.resolution import AlreadyUpToDate, Fetch, Resolution
from prebin.domain.settings import ResolverSettings
from prebin.domain.version import parse_version
from prebin.usecases.config_parser import ConfigParser
from prebin.usecases.desired_targets import DesiredTargets
from prebin.usecases.resolver import ResolveOptions, Resolver

logger = logging.getLogger("prebin")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="prebin",
        description="Find prebuilt binaries for a package instead of building it",
    )
    parser.add_argument("package", help="Package name, optionally as name@version-req")
    parser.add_argument("--config", type=Path, help="YAML config file")
    parser.add_argument(
        "--version",
        dest="version_req",
        help="Version requirement (cannot be combined with name@version-req)",
    )
    parser.add_argument(
        "--manifest-path",
        type=Path,
        help="Use a local manifest file or package directory instead of the registry",
    )
    parser.add_argument(
        "--targets",
        help="Comma-separated target triples to try, most preferred first",
    )
    parser.add_argument("--pkg-url", help="Override the artifact URL template")
    parser.add_argument(
        "--pkg-fmt",
        choices=[fmt.value for fmt in PkgFmt],
        help="Override the artifact format",
    )
    parser.add_argument("--bin-dir", help="Override the binary path template")
    parser.add_argument("--install-path", type=Path, help="Install directory")
    parser.add_argument(
        "--temp-dir",
        type=Path,
        help="Keep downloads in this directory instead of a throwaway one",
    )
    parser.add_argument(
        "--current-version",
        help="Version currently installed; resolution stops if it is the latest match",
    )
    parser.add_argument(
        "--no-symlinks",
        action="store_true",
        default=False,
        help="Do not create unversioned symlinks",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", default=False, help="Debug logging"
    )
    return parser


def load_settings(args: argparse.Namespace) -> ResolverSettings:
    """Combine the config file (if any) with command-line options.

    Command-line values win over config values.
    """
    parser = ConfigParser(default_install_path=default_install_path())
    if args.config is not None:
        try:
            settings = parser.parse(args.config.read_text())
        except OSError as e:
            raise PrebinError(f"cannot read config file {args.config}: {e}") from e
    else:
        settings = parser.parse("")

    overrides = settings.cli_overrides
    overrides = PkgOverride(
        pkg_url=args.pkg_url if args.pkg_url is not None else overrides.pkg_url,
        pkg_fmt=PkgFmt(args.pkg_fmt) if args.pkg_fmt is not None else overrides.pkg_fmt,
        bin_dir=args.bin_dir if args.bin_dir is not None else overrides.bin_dir,
    )

    changes: dict[str, object] = {"cli_overrides": overrides}
    if args.targets:
        changes["targets"] = tuple(t.strip() for t in args.targets.split(",") if t.strip())
    if args.install_path is not None:
        changes["install_path"] = args.install_path
    if args.no_symlinks:
        changes["no_symlinks"] = True
    return replace(settings, **changes)


async def resolve_package(
    settings: ResolverSettings,
    options: ResolveOptions,
    reference: PackageReference,
    current_version: semantic_version.Version | None,
    temp_dir: Path | None = None,
) -> Resolution:
    """Resolve one package with real network adapters."""
    async with httpx.AsyncClient(
        timeout=settings.timeout_seconds,
        headers={"User-Agent": f"prebin/{__version__}"},
    ) as client:
        registry = HttpxCratesIoRegistry(client, api_url=settings.registry_url)
        resolver = Resolver(options, registry, client)

        if temp_dir is not None:
            temp_dir.mkdir(parents=True, exist_ok=True)
            return await resolver.resolve(
                reference, current_version, temp_dir, settings.install_path
            )
        with tempfile.TemporaryDirectory(prefix="prebin-") as tmp:
            return await resolver.resolve(
                reference, current_version, Path(tmp), settings.install_path
            )


def describe(reference: PackageReference, resolution: Resolution) -> str:
    """One-line outcome for stdout."""
    if isinstance(resolution, Fetch):
        return (
            f"{reference.name} v{resolution.package.version}: prebuilt binaries from "
            f"{resolution.fetcher.source_name()} ({resolution.fetcher.target()})"
        )
    if isinstance(resolution, AlreadyUpToDate):
        return f"{reference.name}: already up to date"
    return f"{reference.name} v{resolution.package.version}: install from source"


def main(argv: list[str] | None = None) -> int:
    """Run the command line interface.

    Returns:
        Process exit code: 0 on success, 1 on resolver errors, 130 on interrupt.
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )

    try:
        settings = load_settings(args)
        reference = PackageReference.parse(args.package)
        current_version = (
            parse_version(args.current_version) if args.current_version else None
        )
        options = ResolveOptions(
            desired_targets=DesiredTargets(settings.targets),
            version_req=args.version_req,
            manifest_path=args.manifest_path,
            cli_overrides=settings.cli_overrides,
            no_symlinks=settings.no_symlinks,
        )
        resolution = asyncio.run(
            resolve_package(settings, options, reference, current_version, args.temp_dir)
        )
    except PrebinError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return 130

    sys.stdout.write(describe(reference, resolution) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
