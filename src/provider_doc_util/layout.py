"""Output directory layout and document file I/O.

    <output>/<provider>/<version>/provider.<fmt>
    <output>/<provider>/<version>/services/<service>/<service>-<version>.yaml
    <output>/<provider>/<version>/services/<service>/<service>-<version>-resources.<fmt>
"""

import shutil
from pathlib import Path

import click

from provider_doc_util.codec import decode, encode, format_for_path

RESOURCES_SUFFIX = "-resources"


def provider_root(output_dir: Path, provider: str, version: str) -> Path:
    return output_dir / provider / version


def provider_file(root: Path, fmt: str) -> Path:
    return root / f"provider.{fmt}"


def services_dir(root: Path) -> Path:
    return root / "services"


def service_dir(root: Path, service: str) -> Path:
    return services_dir(root) / service


def service_file(root: Path, service: str, version: str, fmt: str = "yaml") -> Path:
    return service_dir(root, service) / f"{service}-{version}.{fmt}"


def resources_file(root: Path, service: str, version: str, fmt: str) -> Path:
    return service_dir(root, service) / f"{service}-{version}{RESOURCES_SUFFIX}.{fmt}"


def clean_dir(path: Path) -> None:
    """Remove a previous output tree."""
    if path.exists():
        click.echo(f"cleaning dir ({path})...")
        shutil.rmtree(path)


def write_document(path: Path, data: dict, fmt: str | None = None) -> None:
    fmt = fmt or format_for_path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    click.echo(f"writing {path}")
    path.write_text(encode(data, fmt), encoding="utf-8")


def read_document(path: Path, fmt: str | None = None) -> dict:
    fmt = fmt or format_for_path(path)
    return decode(path.read_text(encoding="utf-8"), fmt)
