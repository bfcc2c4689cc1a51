"""Operation classifier — assigns every OpenAPI operation a service,
resource, method id, SQL verb and response code."""

from collections.abc import Iterator

from provider_doc_util.classifier.discriminator import (
    LiteralDiscriminator,
    PathQueryDiscriminator,
    parse_discriminator,
)
from provider_doc_util.classifier.rules import select_response_code, sql_verb
from provider_doc_util.errors import MissingMethodIdError
from provider_doc_util.parser.base import Classification
from provider_doc_util.parser.openapi import iter_operations

DEFAULT_METHOD_KEY = "$.operationId"

# Service name used when the service discriminator matches nothing.
UNRESOLVED_SERVICE = "undefined"


def normalize_method_id(raw: str) -> str:
    """``accounts/list-items`` -> ``list_items``.

    Takes the segment after the first ``/`` and replaces ``-`` with ``_``.
    """
    parts = raw.split("/")
    if len(parts) < 2:
        raise MissingMethodIdError(f"method id {raw!r} has no '/' separator")
    return parts[1].replace("-", "_")


class OperationClassifier:
    """Classifies operations using a service and a resource discriminator."""

    def __init__(
        self,
        service_discriminator: str | LiteralDiscriminator | PathQueryDiscriminator,
        resource_discriminator: str | PathQueryDiscriminator,
        method_key: str = DEFAULT_METHOD_KEY,
    ):
        if isinstance(service_discriminator, str):
            service_discriminator = parse_discriminator(service_discriminator)
        if isinstance(resource_discriminator, str):
            resource_discriminator = parse_discriminator(resource_discriminator, allow_literal=False)
        self.service_discriminator = service_discriminator
        self.resource_discriminator = resource_discriminator
        self.method_key = PathQueryDiscriminator(method_key)

    def classify(self, path_key: str, verb_key: str, operation: dict) -> Classification:
        raw_method = self.method_key.evaluate(operation)
        if raw_method is None:
            raise MissingMethodIdError(
                f"{verb_key.upper()} {path_key} has no value for method key {self.method_key.expression!r}"
            )
        method_id = normalize_method_id(raw_method)

        service = self.service_discriminator.evaluate(operation)
        if service is None:
            service = UNRESOLVED_SERVICE
        resource = self.resource_discriminator.evaluate(operation) or service

        return Classification(
            path_key=path_key,
            verb_key=verb_key,
            service=service,
            resource=resource,
            method_id=method_id,
            sql_verb=sql_verb(method_id),
            response_code=select_response_code(operation.get("responses")),
        )

    def classify_document(self, doc: dict) -> Iterator[tuple[Classification, dict]]:
        """Classify every operation in ``doc`` in source order."""
        for path_key, verb_key, operation in iter_operations(doc):
            yield self.classify(path_key, verb_key, operation), operation
