"""CLI entry point for provider-doc-util."""

from pathlib import Path

import click

from provider_doc_util.classifier.discriminator import PathQueryDiscriminator, parse_discriminator
from provider_doc_util.classifier.operations import DEFAULT_METHOD_KEY, OperationClassifier
from provider_doc_util.codec import DEFAULT_FORMAT, FORMATS
from provider_doc_util.generator.dev import create_dev_docs
from provider_doc_util.generator.package import build_provider_package


@click.group()
def main():
    """Creates and builds documents for stackql provider interfaces."""
    pass


@main.command()
@click.argument("api_doc", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("provider_name")
@click.argument("provider_version")
@click.option("-s", "--svcdiscriminator", "svc_discriminator", required=True, metavar="JSONPATH|svcName:NAME",
              help="JSONPath expression relative to each operation that names its service, or svcName:<name> for a single service.")
@click.option("-r", "--resdiscriminator", "res_discriminator", required=True, metavar="JSONPATH",
              help="JSONPath expression relative to each operation that names its resource.")
@click.option("-m", "--methodkey", "method_key", default=DEFAULT_METHOD_KEY, show_default=True, metavar="JSONPATH",
              help="JSONPath expression that identifies resource methods.")
@click.option("-o", "--output", type=click.Path(file_okay=False, path_type=Path), default=Path.cwd,
              envvar="PROVIDER_DOC_UTIL_OUTPUT", help="Directory to write the development documents to. (defaults to cwd)")
@click.option("-f", "--format", "fmt", default=DEFAULT_FORMAT, show_default=True, type=click.Choice(FORMATS),
              envvar="PROVIDER_DOC_UTIL_FORMAT", help="Output format for provider and resource definitions.")
@click.option("-d", "--debug", is_flag=True, envvar="PROVIDER_DOC_UTIL_DEBUG", help="Debug output.")
def dev(api_doc: Path, provider_name: str, provider_version: str, svc_discriminator: str,
        res_discriminator: str, method_key: str, output: Path, fmt: str, debug: bool):
    """Create development documents from an OpenAPI spec.

    The documents can be reviewed and modified, then packaged with the
    build command.

    \b
    API_DOC           OpenAPI specification of the provider.
    PROVIDER_NAME     Provider name used in stackql.
    PROVIDER_VERSION  Provider version, for example v1.
    """
    if debug:
        click.echo(f"API doc : {api_doc}")
        click.echo(f"Stackql Provider Name : {provider_name}")
        click.echo(f"Stackql Provider Version : {provider_version}")
        click.echo(f"Service discriminator : {svc_discriminator}")
        click.echo(f"Resource discriminator : {res_discriminator}")
        click.echo(f"StackQL method key : {method_key}")
        click.echo(f"Output directory : {output}")
        click.echo(f"Output format : {fmt}")
        click.echo(f"Debug : {debug}")

    service = parse_discriminator(svc_discriminator)
    resource = parse_discriminator(res_discriminator, allow_literal=False)
    for name, discriminator in (("service", service), ("resource", resource)):
        if isinstance(discriminator, PathQueryDiscriminator) and not discriminator.is_valid:
            click.echo(f"WARNING: {name} discriminator {discriminator.expression!r} is not valid JSONPath", err=True)

    classifier = OperationClassifier(service, resource, method_key=method_key)
    root = create_dev_docs(api_doc, provider_name, provider_version, classifier, output, fmt=fmt, debug=debug)
    click.echo(f"Dev docs written to {root}")


@main.command()
@click.argument("dev_doc_root", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument("provider_name")
@click.argument("provider_version")
@click.option("-o", "--output", type=click.Path(file_okay=False, path_type=Path), default=Path.cwd,
              envvar="PROVIDER_DOC_UTIL_OUTPUT", help="Directory to write the provider package to. (defaults to cwd)")
@click.option("-d", "--debug", is_flag=True, envvar="PROVIDER_DOC_UTIL_DEBUG", help="Debug output.")
def build(dev_doc_root: Path, provider_name: str, provider_version: str, output: Path, debug: bool):
    """Package documents created by the dev command.

    \b
    DEV_DOC_ROOT      Directory containing the development documents.
    PROVIDER_NAME     Provider name used in stackql.
    PROVIDER_VERSION  Provider version, for example v1.
    """
    root = build_provider_package(dev_doc_root, provider_name, provider_version, output, debug=debug)
    click.echo(f"Provider package written to {root}")
