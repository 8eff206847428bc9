"""
Unit tests for the OpenAPI document generator.
"""

from dataclasses import dataclass

import pytest

from rail_rest import ApiMeta, SchemaGenerator
from rail_rest.core.meta import ValueType
from rail_rest.core.registry import MetadataRegistry
from rail_rest.core.settings import SchemaSettings
from rail_rest.schema.types import value_schema
from tests.entities import Category, Product, Tag, Warehouse, min_stock_filter
from tests.models import ShopCategory, ShopProduct

pytestmark = pytest.mark.unit


@dataclass
class Coupon:
    id: str = ""
    code: str = ""

    class ApiMeta(ApiMeta):
        resource = ApiMeta.Resource(operations=["GET"], pagination_enabled=False)
        filters = [
            ApiMeta.Filter(min_stock_filter, ["min_stock"], {"description": "Minimum stock"}),
            ApiMeta.Filter("geo", ["area"]),
        ]


@dataclass
class Voucher:
    id: int = 0
    price: float = 0.0

    class ApiMeta(ApiMeta):
        resource = ApiMeta.Resource(operations=["GET"])
        filters = [
            ApiMeta.Filter("range", ["price"]),
            ApiMeta.Filter("search", ["price"]),
        ]


def parameter_names(operation):
    return [parameter["name"] for parameter in operation["parameters"]]


class TestSchemaGenerator:
    def setup_method(self):
        self.generator = SchemaGenerator(MetadataRegistry())
        self.document = self.generator.generate([Product, Category, Tag])

    def test_document_header(self):
        assert self.document["openapi"] == "3.0.0"
        assert self.document["info"] == {"title": "Test API", "version": "2.0.0"}
        assert self.document["servers"] == [{"url": "/api"}]
        assert self.document["tags"] == [
            {"name": "Product"},
            {"name": "Category", "description": "Product categories"},
        ]

    def test_non_resources_are_skipped(self):
        assert list(self.document["components"]["schemas"]) == [
            "ProblemDetails",
            "Product",
            "Category",
        ]

    def test_paths_follow_enabled_operations(self):
        paths = self.document["paths"]
        assert set(paths["/product"]) == {"get", "post"}
        assert set(paths["/product/{id}"]) == {"get", "put", "delete"}
        assert set(paths["/category"]) == {"get"}
        assert set(paths["/category/{id}"]) == {"get"}

    def test_operation_ids_and_responses(self):
        paths = self.document["paths"]
        assert paths["/product"]["get"]["operationId"] == "getProductCollection"
        assert paths["/product"]["post"]["operationId"] == "createProduct"
        assert set(paths["/product"]["post"]["responses"]) == {"201", "400", "422"}
        assert set(paths["/product/{id}"]["get"]["responses"]) == {"200", "404"}
        assert set(paths["/product/{id}"]["put"]["responses"]) == {"200", "400", "404", "422"}
        assert set(paths["/product/{id}"]["delete"]["responses"]) == {"204", "404"}
        problem = paths["/product/{id}"]["delete"]["responses"]["404"]["content"]
        assert problem["application/problem+json"]["schema"] == {
            "$ref": "#/components/schemas/ProblemDetails"
        }

    def test_collection_response_is_an_array_of_the_component(self):
        response = self.document["paths"]["/product"]["get"]["responses"]["200"]
        assert response["content"]["application/json"]["schema"] == {
            "type": "array",
            "items": {"$ref": "#/components/schemas/Product"},
        }

    def test_collection_parameters(self):
        operation = self.document["paths"]["/product"]["get"]
        assert parameter_names(operation) == [
            "page",
            "limit",
            "name",
            "price",
            "stock",
            "created_at",
            "active",
            "order[name]",
            "order[price]",
            "embed",
        ]
        limit = operation["parameters"][1]
        assert limit["schema"]["default"] == 20

    def test_filter_parameter_shapes(self):
        parameters = {
            p["name"]: p for p in self.document["paths"]["/product"]["get"]["parameters"]
        }
        search = parameters["name"]["schema"]["oneOf"]
        assert search[0] == {"type": "string"}
        assert set(search[1]["properties"]) == {"exact", "partial", "start", "end", "word_start"}
        assert parameters["active"]["schema"] == {"type": "boolean"}
        assert parameters["order[price]"]["schema"]["enum"] == ["asc", "desc"]
        assert "category, tags" in parameters["embed"]["description"]

    def test_generic_order_without_order_bindings(self):
        operation = self.document["paths"]["/category"]["get"]
        assert parameter_names(operation) == ["page", "limit", "order"]

    def test_item_parameters(self):
        product_item = self.document["paths"]["/product/{id}"]["get"]
        assert parameter_names(product_item) == ["id", "embed"]
        assert product_item["parameters"][0]["schema"] == {"type": "integer"}
        category_item = self.document["paths"]["/category/{id}"]["get"]
        assert parameter_names(category_item) == ["id"]

    def test_output_schema(self):
        schema = self.document["components"]["schemas"]["Product"]
        properties = schema["properties"]
        assert list(properties) == [
            "id",
            "name",
            "price",
            "stock",
            "active",
            "created_at",
            "status",
            "category",
            "tags",
            "dimensions",
            "list_price",
        ]
        assert schema["required"] == ["name"]
        assert properties["name"] == {"type": "string", "description": "Display name"}
        assert properties["price"] == {"type": "number", "format": "float", "default": 0.0}
        assert properties["created_at"] == {
            "type": "string",
            "format": "date-time",
            "nullable": True,
        }
        assert properties["category"] == {
            "oneOf": [{"type": "integer"}, {"$ref": "#/components/schemas/Category"}],
            "nullable": True,
        }
        assert properties["tags"] == {"type": "array", "items": {"type": "integer"}}

    def test_request_body(self):
        body = self.document["paths"]["/product"]["post"]["requestBody"]
        schema = body["content"]["application/json"]["schema"]
        assert body["required"] is True
        assert list(schema["properties"]) == [
            "name",
            "price",
            "stock",
            "status",
            "category",
            "tags",
            "dimensions",
            "list_price",
        ]
        assert schema["required"] == ["name"]
        assert schema["properties"]["category"] == {"type": "integer", "nullable": True}

    def test_custom_and_unknown_filters(self):
        document = self.generator.generate([Coupon])
        operation = document["paths"]["/coupon"]["get"]
        assert parameter_names(operation) == ["order", "min_stock"]
        custom = operation["parameters"][1]
        assert custom["description"] == "Minimum stock"
        item = document["paths"]["/coupon/{id}"]["get"]
        assert item["parameters"][0]["schema"] == {"type": "string"}

    def test_field_with_several_filters_is_documented_once(self):
        document = self.generator.generate([Voucher])
        operation = document["paths"]["/voucher"]["get"]
        assert parameter_names(operation) == ["page", "limit", "order", "price"]
        price = operation["parameters"][3]
        assert price["style"] == "deepObject"
        scalar, strategies = price["schema"]["oneOf"]
        assert scalar == {"type": "number"}
        assert {"gte", "between", "partial", "exact"} <= set(strategies["properties"])
        assert price["description"].startswith("Range filter on 'price'")
        assert "Search filter on 'price'" in price["description"]

    def test_documents_do_not_share_schema_fragments(self):
        first = self.generator.generate([Product])
        first["components"]["schemas"]["ProblemDetails"]["properties"].clear()
        second = self.generator.generate([Product])
        problem = second["components"]["schemas"]["ProblemDetails"]
        assert set(problem["properties"]) >= {"type", "title", "status", "violations"}
        value_schema(ValueType.ARRAY)["items"]["type"] = "string"
        assert value_schema(ValueType.ARRAY) == {"type": "array", "items": {}}

    def test_overrides(self):
        document = self.generator.generate(
            [Category], title="Shop", version="3.1.0", base_path="/v3"
        )
        assert document["info"] == {"title": "Shop", "version": "3.1.0"}
        assert document["servers"] == [{"url": "/v3"}]

    def test_settings(self):
        generator = SchemaGenerator(
            MetadataRegistry(),
            SchemaSettings(title="Shop", description="Shop API", openapi_version="3.1.0"),
        )
        document = generator.generate([Category])
        assert document["openapi"] == "3.1.0"
        assert document["info"]["description"] == "Shop API"


class TestDefaultResources:
    def test_every_known_resource_is_documented(self):
        document = SchemaGenerator().generate()
        schemas = document["components"]["schemas"]
        for name in ("Warehouse", "Product", "Category", "ShopCategory", "ShopProduct"):
            assert name in schemas

    def test_discovered_registration(self):
        document = SchemaGenerator().generate([Warehouse])
        operation = document["paths"]["/warehouse"]["get"]
        assert parameter_names(operation) == ["order", "code"]
        assert "post" in document["paths"]["/warehouse"]
        schema = document["components"]["schemas"]["Warehouse"]
        assert schema["properties"]["code"]["description"] == "Warehouse code"
        assert schema["required"] == ["code"]

    def test_django_models(self):
        document = SchemaGenerator().generate([ShopProduct, ShopCategory])
        properties = document["components"]["schemas"]["ShopProduct"]["properties"]
        assert properties["price"]["type"] == "number"
        assert properties["name"]["description"] == "Display name"
        assert properties["category"]["oneOf"][1] == {
            "$ref": "#/components/schemas/ShopCategory"
        }
        operation = document["paths"]["/shopproduct"]["get"]
        assert parameter_names(operation)[:2] == ["page", "limit"]
        assert operation["parameters"][1]["schema"]["default"] == 50
