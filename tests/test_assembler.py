from pathlib import Path

from provider_doc_util.classifier.operations import OperationClassifier
from provider_doc_util.generator.assembler import DocumentAssembler
from provider_doc_util.generator.dev import assemble
from provider_doc_util.parser.base import Classification
from provider_doc_util.parser.openapi import load_openapi

FIXTURES = Path(__file__).parent / "fixtures"
REF = "#/components/x-stackQL-resources"


def _classification(**overrides) -> Classification:
    defaults = dict(
        path_key="/accounts",
        verb_key="get",
        service="accounts",
        resource="accounts",
        method_id="list_accounts",
        sql_verb="select",
        response_code="200",
    )
    defaults.update(overrides)
    return Classification(**defaults)


def _assembled() -> tuple[dict, DocumentAssembler]:
    api = load_openapi(FIXTURES / "accounts.yaml")
    classifier = OperationClassifier("$.x-service", "$.tags[0]")
    return api, assemble(api, classifier, "example", "v1")


class TestSingleOperation:
    def test_end_to_end_single_path(self):
        api = {
            "openapi": "3.0.0",
            "info": {"title": "Accounts", "version": "1.0"},
            "paths": {"/accounts": {"get": {"operationId": "svc/list-accounts", "responses": {"200": {}}}}},
        }
        assembler = assemble(api, OperationClassifier("svcName:accounts", "$.tags[0]"), "example", "v1")

        resources = assembler.resource_documents()["accounts"]["components"]["x-stackQL-resources"]
        assert list(resources) == ["accounts"]
        accounts = resources["accounts"]
        assert accounts["id"] == "example.accounts.accounts"
        assert list(accounts["methods"]) == ["list_accounts"]
        assert accounts["sqlVerbs"]["select"] == [{"$ref": f"{REF}/accounts/methods/list_accounts"}]
        assert accounts["sqlVerbs"]["update"] == []

    def test_method_definition_shape(self):
        assembler = DocumentAssembler("example", "v1")
        assembler.add(_classification(verb_key="post", method_id="create_account", sql_verb="insert",
                                      response_code="201"), {})
        method = assembler.resource_documents()["accounts"]["components"]["x-stackQL-resources"]["accounts"]["methods"]["create_account"]
        assert method == {
            "operation": {"$ref": "POST"},
            "path": {"$ref": "/accounts"},
            "response": {"mediaType": "application/json", "openAPIDocKey": "201", "objectKey": "items"},
        }


class TestAccumulation:
    def test_services_and_resources(self):
        _, assembler = _assembled()
        docs = assembler.resource_documents()
        assert list(docs) == ["iam", "billing"]
        iam = docs["iam"]["components"]["x-stackQL-resources"]
        assert list(iam) == ["accounts", "keys"]
        assert iam["keys"]["id"] == "example.iam.keys"
        billing = docs["billing"]["components"]["x-stackQL-resources"]
        assert billing["billing"]["id"] == "example.billing.billing"

    def test_verb_routing(self):
        _, assembler = _assembled()
        iam = assembler.resource_documents()["iam"]["components"]["x-stackQL-resources"]
        verbs = iam["accounts"]["sqlVerbs"]
        assert verbs["select"] == [
            {"$ref": f"{REF}/accounts/methods/list_accounts"},
            {"$ref": f"{REF}/accounts/methods/get_account"},
        ]
        assert verbs["insert"] == [{"$ref": f"{REF}/accounts/methods/create_account"}]
        assert verbs["delete"] == [{"$ref": f"{REF}/accounts/methods/delete_account"}]
        assert verbs["update"] == []

    def test_exec_methods_are_not_routed(self):
        _, assembler = _assembled()
        keys = assembler.resource_documents()["iam"]["components"]["x-stackQL-resources"]["keys"]
        assert "rotate_key" in keys["methods"]
        assert keys["sqlVerbs"] == {"select": [], "insert": [], "update": [], "delete": []}

    def test_duplicate_method_id_last_write_wins(self):
        assembler = DocumentAssembler("example", "v1")
        assembler.add(_classification(path_key="/a"), {})
        assembler.add(_classification(path_key="/b", response_code="206"), {})
        resource = assembler.resource_documents()["accounts"]["components"]["x-stackQL-resources"]["accounts"]
        assert resource["methods"]["list_accounts"]["path"] == {"$ref": "/b"}
        assert resource["methods"]["list_accounts"]["response"]["openAPIDocKey"] == "206"
        assert len(resource["sqlVerbs"]["select"]) == 2


class TestProviderDocument:
    def test_provider_index(self):
        api, assembler = _assembled()
        doc = assembler.provider_document(api)
        assert list(doc["providerServices"]) == ["iam", "billing"]
        assert doc["providerServices"]["iam"] == {
            "description": "iam",
            "id": "iam:v1",
            "name": "iam",
            "preferred": True,
            "service": {"$ref": "example/v1/services/iam/iam-v1.yaml"},
            "title": "iam",
            "version": "v1",
        }
        assert doc["id"] == "example"
        assert doc["name"] == "example"
        assert doc["version"] == "v1"
        assert doc["openapi"] == "3.0.0"
        assert doc["title"] == "Accounts API"
        assert doc["description"] == "Manage accounts, keys and invoices."

    def test_missing_description_is_omitted(self):
        api = {"openapi": "3.0.0", "info": {"title": "T"}, "paths": {}}
        doc = DocumentAssembler("example", "v1").provider_document(api)
        assert "description" not in doc
        assert doc["providerServices"] == {}


class TestServiceDocuments:
    def test_paths_split_by_service(self):
        api, assembler = _assembled()
        docs = assembler.service_documents(api)
        assert list(docs["iam"]["paths"]) == ["/accounts", "/accounts/{accountId}", "/keys/{keyId}/rotate"]
        assert list(docs["iam"]["paths"]["/accounts"]) == ["get", "post"]
        assert list(docs["billing"]["paths"]) == ["/billing/invoices"]

    def test_shared_keys_copied(self):
        api, assembler = _assembled()
        doc = assembler.service_documents(api)["billing"]
        assert doc["info"] == api["info"]
        assert doc["servers"] == api["servers"]
        assert doc["tags"] == api["tags"]
        assert doc["externalDocs"] == api["externalDocs"]
        assert doc["components"] == api["components"]
        assert doc["openapi"] == "3.0.0"
