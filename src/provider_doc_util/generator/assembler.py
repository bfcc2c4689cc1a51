"""Document assembler — accumulates classified operations into provider,
service and resource documents."""

import click

from provider_doc_util.parser.base import (
    RESOURCES_KEY,
    Classification,
    MethodDefinition,
    MethodResponse,
    ProviderDefinition,
    ProviderService,
    Ref,
    Resource,
)

SHARED_OPENAPI_KEYS = ("openapi", "info", "tags", "servers", "externalDocs", "components")

ROUTED_VERBS = ("select", "insert", "delete")


class DocumentAssembler:
    """Holds the per-run state for one provider version.

    ``add`` must be called in source order; output ordering follows it.
    """

    def __init__(self, provider: str, version: str, debug: bool = False):
        self.provider = provider
        self.version = version
        self.debug = debug
        self.paths: dict[str, dict[str, dict]] = {}
        self.resources: dict[str, dict[str, Resource]] = {}
        self.definition = ProviderDefinition()

    def add(self, classification: Classification, operation: dict) -> None:
        c = classification
        if self.debug:
            click.echo(f"api {c.path_key}:{c.verb_key}")
            click.echo(f"stackqlService : {c.service}")
            click.echo(f"stackqlResource : {c.resource}")
            click.echo(f"stackqlMethod : {c.method_id}")
            click.echo("--------------------------")

        if c.service not in self.paths:
            self._init_service(c.service)
        self.paths[c.service].setdefault(c.path_key, {})[c.verb_key] = operation

        resources = self.resources[c.service]
        if c.resource not in resources:
            resources[c.resource] = Resource(
                id=f"{self.provider}.{c.service}.{c.resource}",
                name=c.resource,
                title=c.resource,
            )
        resource = resources[c.resource]

        resource.methods[c.method_id] = MethodDefinition(
            operation=Ref(ref=c.verb_key.upper()),
            path=Ref(ref=c.path_key),
            response=MethodResponse(open_api_doc_key=c.response_code),
        )

        if c.sql_verb in ROUTED_VERBS:
            token = Ref(ref=f"#/components/{RESOURCES_KEY}/{c.resource}/methods/{c.method_id}")
            getattr(resource.sql_verbs, c.sql_verb).append(token)

    def _init_service(self, service: str) -> None:
        self.paths[service] = {}
        self.resources[service] = {}
        self.definition.provider_services[service] = ProviderService(
            description=service,
            id=f"{service}:{self.version}",
            name=service,
            service=Ref(ref=f"{self.provider}/{self.version}/services/{service}/{service}-{self.version}.yaml"),
            title=service,
            version=self.version,
        )

    def provider_document(self, api: dict) -> dict:
        """The provider index, with metadata from the source document."""
        info = api.get("info") or {}
        definition = self.definition.model_copy(
            update={
                "openapi": _optional_str(api.get("openapi")),
                "id": self.provider,
                "name": self.provider,
                "version": self.version,
                "description": _optional_str(info.get("description")),
                "title": _optional_str(info.get("title")),
            }
        )
        return definition.to_document()

    def service_documents(self, api: dict) -> dict[str, dict]:
        """OpenAPI subset per service: its paths plus the shared top-level keys."""
        docs = {}
        for service, paths in self.paths.items():
            doc = {"paths": paths}
            for key in SHARED_OPENAPI_KEYS:
                if api.get(key) is not None:
                    doc[key] = api[key]
            docs[service] = doc
        return docs

    def resource_documents(self) -> dict[str, dict]:
        """Resource definitions per service under ``components.x-stackQL-resources``."""
        return {
            service: {
                "components": {
                    RESOURCES_KEY: {name: res.to_document() for name, res in resources.items()},
                }
            }
            for service, resources in self.resources.items()
        }


def _optional_str(value) -> str | None:
    return None if value is None else str(value)
