"""Data models for stackql provider documents.

The assembler builds these models while classifying operations and dumps
them with ``by_alias=True`` so the wire keys (``$ref``, ``sqlVerbs``,
``openAPIDocKey``) match what stackql reads.
"""

from pydantic import BaseModel, ConfigDict, Field

RESOURCES_KEY = "x-stackQL-resources"


class _Model(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class Ref(_Model):
    """A ``{"$ref": ...}`` reference token."""

    ref: str = Field(alias="$ref")


class MethodResponse(_Model):
    media_type: str = Field(default="application/json", alias="mediaType")
    open_api_doc_key: str = Field(alias="openAPIDocKey")  # selected response code
    object_key: str = Field(default="items", alias="objectKey")


class MethodDefinition(_Model):
    """One resource method, pointing back at its OpenAPI operation."""

    operation: Ref  # upper-cased HTTP verb
    path: Ref  # OpenAPI path key
    response: MethodResponse


class SqlVerbs(_Model):
    select: list[Ref] = []
    insert: list[Ref] = []
    update: list[Ref] = []
    delete: list[Ref] = []


class Resource(_Model):
    """A queryable stackql resource within a service."""

    id: str  # <provider>.<service>.<resource>
    name: str
    title: str
    methods: dict[str, MethodDefinition] = {}
    sql_verbs: SqlVerbs = Field(default_factory=SqlVerbs, alias="sqlVerbs")


class ProviderService(_Model):
    """A service entry in the provider index."""

    description: str
    id: str  # <service>:<version>
    name: str
    preferred: bool = True
    service: Ref
    title: str
    version: str


class ProviderDefinition(_Model):
    """Top-level provider document referencing every service document."""

    provider_services: dict[str, ProviderService] = Field(default_factory=dict, alias="providerServices")
    openapi: str | None = None
    id: str | None = None
    name: str | None = None
    version: str | None = None
    description: str | None = None
    title: str | None = None


class Classification(BaseModel):
    """Where a single (path, verb) operation lands."""

    path_key: str
    verb_key: str
    service: str
    resource: str
    method_id: str
    sql_verb: str  # select / insert / delete / exec
    response_code: str
