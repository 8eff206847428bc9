"""
Tests for query-string parsing, problem details and the schema views.
"""

import json

import pytest
from django.http import QueryDict
from django.test import Client, TestCase, override_settings
from django.urls import reverse

from rail_rest import NotFoundError, ProblemDetails, ValidationError, Violation
from rail_rest.exceptions import problem_response
from rail_rest.http import parse_query_params

pytestmark = pytest.mark.unit


class TestParseQueryParams:
    def test_bracket_keys_become_nested_mappings(self):
        query = QueryDict("price[gte]=10&price[lte]=20&active=1&order[name]=desc")
        assert parse_query_params(query) == {
            "price": {"gte": "10", "lte": "20"},
            "active": "1",
            "order": {"name": "desc"},
        }

    def test_last_value_wins(self):
        assert parse_query_params(QueryDict("name=a&name=b")) == {"name": "b"}

    def test_list_keys_collect_every_value(self):
        query = QueryDict("tags[]=a&tags[]=b&price[between][]=1&price[between][]=5")
        assert parse_query_params(query) == {
            "tags": ["a", "b"],
            "price": {"between": ["1", "5"]},
        }

    def test_plain_mappings(self):
        assert parse_query_params({"price[gt]": 3, "embed": ["a", "b"]}) == {
            "price": {"gt": 3},
            "embed": "b",
        }

    def test_keys_without_a_name_are_skipped(self):
        assert parse_query_params(QueryDict("[gte]=1&name=x")) == {"name": "x"}

    def test_rejects_other_inputs(self):
        with pytest.raises(TypeError):
            parse_query_params("price[gte]=1")


class TestProblemDetails:
    def test_not_found(self):
        problem = ProblemDetails.from_exception(NotFoundError("No such thing."), "/api/x")
        assert problem.to_dict() == {
            "type": "about:blank",
            "title": "Not Found",
            "status": 404,
            "detail": "No such thing.",
            "instance": "/api/x",
        }

    def test_validation_errors_carry_violations(self):
        error = ValidationError([Violation("name", "This field is required.", "required")])
        payload = ProblemDetails.from_exception(error).to_dict()
        assert payload["status"] == 422
        assert payload["detail"] == "1 violation(s)"
        assert payload["violations"] == [
            {"field": "name", "message": "This field is required.", "code": "required"}
        ]

    def test_problem_response(self):
        response = problem_response(NotFoundError())
        assert response.status_code == 404
        assert response["Content-Type"] == "application/problem+json"
        assert json.loads(response.content)["detail"] == "Not Found"


class OpenAPISchemaViewTests(TestCase):
    def setUp(self):
        self.client = Client()

    def test_full_document(self):
        response = self.client.get(reverse("rail_rest:openapi-schema"))
        self.assertEqual(response.status_code, 200)
        document = response.json()
        self.assertEqual(document["info"]["title"], "Test API")
        self.assertIn("/product", document["paths"])
        self.assertIn("/warehouse", document["paths"])

    def test_single_resource_by_path(self):
        url = reverse("rail_rest:openapi-schema-resource", args=["category"])
        document = self.client.get(url).json()
        self.assertEqual(set(document["paths"]), {"/category", "/category/{id}"})

    def test_single_resource_by_query(self):
        url = reverse("rail_rest:openapi-schema")
        document = self.client.get(url, {"resource": "Warehouse"}).json()
        self.assertEqual(set(document["paths"]), {"/warehouse", "/warehouse/{id}"})

    def test_unknown_resource(self):
        url = reverse("rail_rest:openapi-schema-resource", args=["missing"])
        response = self.client.get(url)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response["Content-Type"], "application/problem+json")
        payload = response.json()
        self.assertEqual(payload["status"], 404)
        self.assertEqual(payload["instance"], url)

    def test_post_not_allowed(self):
        response = self.client.post(reverse("rail_rest:openapi-schema"))
        self.assertEqual(response.status_code, 405)

    @override_settings(RAIL_REST={"schema_settings": {"title": "Overridden", "resources": []}})
    def test_settings_are_read_per_request(self):
        document = self.client.get(reverse("rail_rest:openapi-schema")).json()
        self.assertEqual(document["info"]["title"], "Overridden")
        self.assertNotIn("/product", document["paths"])
        self.assertIn("/warehouse", document["paths"])
