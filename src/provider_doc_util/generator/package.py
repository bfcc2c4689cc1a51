"""Build step — packages dev documents for local testing and publishing."""

from pathlib import Path

import click

from provider_doc_util.codec import FORMATS
from provider_doc_util.errors import MissingArtifactError, ProviderDocError
from provider_doc_util.layout import (
    RESOURCES_SUFFIX,
    clean_dir,
    provider_file,
    provider_root,
    read_document,
    service_file,
    services_dir,
    write_document,
)
from provider_doc_util.parser.base import RESOURCES_KEY
from provider_doc_util.parser.openapi import load_openapi

PACKAGE_FORMAT = "yaml"

# Order in which provider documents are looked for.
PROVIDER_DOC_FORMATS = ("toml", "yaml", "json", "hcl")


def merge_service_document(openapi_doc: dict, resources_doc: dict) -> dict:
    """Return the OpenAPI document with the resources embedded in its components."""
    try:
        resources = resources_doc["components"][RESOURCES_KEY]
    except (KeyError, TypeError):
        raise MissingArtifactError(f"resources document has no components.{RESOURCES_KEY}") from None

    merged = dict(openapi_doc)
    components = merged.get("components")
    merged["components"] = dict(components) if isinstance(components, dict) else {}
    merged["components"][RESOURCES_KEY] = resources
    return merged


def find_provider_doc(doc_dir: Path) -> Path:
    for fmt in PROVIDER_DOC_FORMATS:
        candidate = provider_file(doc_dir, fmt)
        if candidate.exists():
            return candidate
    raise MissingArtifactError(f"no provider doc found in {doc_dir}")


def find_resources_doc(svc_dir: Path) -> Path:
    """The resource definition file of a service; the last one by name wins."""
    found = None
    for path in sorted(svc_dir.iterdir()):
        fmt = path.suffix.lstrip(".")
        if fmt in FORMATS and path.stem.endswith(RESOURCES_SUFFIX):
            found = path
    if found is None:
        raise MissingArtifactError(f"no resource definitions found in {svc_dir}")
    return found


def build_provider_package(dev_root: Path, provider: str, version: str, output_dir: Path, debug: bool = False) -> Path:
    """Merge dev documents into a provider package; returns the package root."""
    doc_dir = provider_root(dev_root, provider, version)
    build_dir = provider_root(output_dir, provider, version)
    click.echo(f"looking for dev docs in {doc_dir}...")
    if not doc_dir.exists():
        raise MissingArtifactError(f"{doc_dir} does not exist")
    if doc_dir.resolve() == build_dir.resolve():
        raise ProviderDocError(f"build output {build_dir} would overwrite the dev docs")

    provider_doc = find_provider_doc(doc_dir)
    if debug:
        click.echo(f"converting {provider_doc.suffix.lstrip('.')} to {PACKAGE_FORMAT}...")
    provider_data = read_document(provider_doc)

    svcs_input_dir = services_dir(doc_dir)
    if not svcs_input_dir.is_dir():
        raise MissingArtifactError(f"{svcs_input_dir} does not exist")

    clean_dir(build_dir)
    services_dir(build_dir).mkdir(parents=True, exist_ok=True)
    write_document(provider_file(build_dir, PACKAGE_FORMAT), provider_data, PACKAGE_FORMAT)

    for svc_dir in sorted(p for p in svcs_input_dir.iterdir() if p.is_dir()):
        service = svc_dir.name
        click.echo(f"processing {service}...")
        openapi_file = service_file(doc_dir, service, version)
        if not openapi_file.exists():
            raise MissingArtifactError(f"{openapi_file} does not exist")
        openapi_doc = load_openapi(openapi_file)
        resources_doc = read_document(find_resources_doc(svc_dir))
        write_document(
            service_file(build_dir, service, version, PACKAGE_FORMAT),
            merge_service_document(openapi_doc, resources_doc),
            PACKAGE_FORMAT,
        )
    return build_dir
