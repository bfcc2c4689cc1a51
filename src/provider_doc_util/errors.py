"""Errors raised while creating or building provider documents.

Every error is a ``click.ClickException`` so the CLI reports it as
``Error: <message>`` and exits with status 1.
"""

import click


class ProviderDocError(click.ClickException):
    """Base class for fatal provider-doc-util errors."""


class MissingArtifactError(ProviderDocError):
    """An expected document, directory or resources envelope does not exist."""


class InvalidSourceError(ProviderDocError):
    """The source document is not an OpenAPI mapping."""


class CodecError(ProviderDocError):
    """A document could not be encoded or decoded."""


class ClassificationError(ProviderDocError):
    """An operation could not be assigned a method."""


class MissingMethodIdError(ClassificationError):
    pass
