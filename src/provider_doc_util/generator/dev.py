"""Dev step — splits an OpenAPI document into stackql development documents."""

from pathlib import Path

import click

from provider_doc_util.classifier.operations import OperationClassifier
from provider_doc_util.codec import DEFAULT_FORMAT
from provider_doc_util.generator.assembler import DocumentAssembler
from provider_doc_util.layout import (
    clean_dir,
    provider_file,
    provider_root,
    resources_file,
    service_file,
    write_document,
)
from provider_doc_util.parser.openapi import load_openapi


def assemble(api: dict, classifier: OperationClassifier, provider: str, version: str, debug: bool = False) -> DocumentAssembler:
    """Classify every operation of ``api`` into a fresh assembler."""
    assembler = DocumentAssembler(provider, version, debug=debug)
    for classification, operation in classifier.classify_document(api):
        assembler.add(classification, operation)
    return assembler


def create_dev_docs(
    api_doc: Path,
    provider: str,
    version: str,
    classifier: OperationClassifier,
    output_dir: Path,
    fmt: str = DEFAULT_FORMAT,
    debug: bool = False,
) -> Path:
    """Write provider, service and resource documents; returns the provider root.

    Everything is classified before the previous output is removed, so a
    fatal classification error leaves the old tree in place.
    """
    api = load_openapi(api_doc)
    if debug:
        info = api.get("info") or {}
        click.echo(f"API name: {info.get('title')}, Version: {info.get('version')}")

    assembler = assemble(api, classifier, provider, version, debug=debug)

    root = provider_root(output_dir, provider, version)
    clean_dir(root)
    write_document(provider_file(root, fmt), assembler.provider_document(api), fmt)
    for service, doc in assembler.service_documents(api).items():
        write_document(service_file(root, service, version), doc, "yaml")
    for service, doc in assembler.resource_documents().items():
        write_document(resources_file(root, service, version, fmt), doc, fmt)
    return root
