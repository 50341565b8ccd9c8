"""Tests for the endpoint table and the catalog built from it."""

import pytest

from wp_mcp.api.endpoints import (
    WOOCOMMERCE_ENDPOINTS,
    WORDPRESS_ENDPOINTS,
    Endpoint,
    Field,
    index_endpoints,
)
from wp_mcp.tools import ALL_ENDPOINTS, ALL_TOOLS


class TestEndpointTable:

    def test_names_unique_and_prefixed(self):
        names = [t["name"] for t in ALL_TOOLS]
        assert len(names) == len(set(names))
        assert all(e.name.startswith("wp_") for e in WORDPRESS_ENDPOINTS)
        assert all(e.name.startswith("wc_") for e in WOOCOMMERCE_ENDPOINTS)

    def test_catalog_size(self):
        assert len(WORDPRESS_ENDPOINTS) >= 40
        assert len(WOOCOMMERCE_ENDPOINTS) >= 90

    def test_path_params_are_required_fields(self):
        for endpoint in ALL_ENDPOINTS.values():
            required = {f.name for f in endpoint.fields if f.required}
            for param in endpoint.path_params:
                assert param in required, f"{endpoint.name}: {param}"

    def test_update_verbs_per_family(self):
        assert ALL_ENDPOINTS["wp_update_post"].method == "POST"
        assert ALL_ENDPOINTS["wc_update_product"].method == "PUT"

    def test_known_operations_present(self):
        for name in (
            "wp_delete_post", "wp_upload_media", "wp_list_menus", "wp_search",
            "wc_create_product", "wc_get_product", "wc_batch_products",
            "wc_list_product_variations", "wc_create_order_note",
            "wc_delete_tax_class", "wc_run_system_status_tool",
            "wc_batch_update_setting_options", "wc_create_webhook",
        ):
            assert name in ALL_ENDPOINTS

    def test_settings_tools_do_not_shadow(self):
        assert ALL_ENDPOINTS["wp_get_settings"].path == "settings"
        assert ALL_ENDPOINTS["wc_list_setting_groups"].path == "settings"

    def test_nested_paths(self):
        assert ALL_ENDPOINTS["wc_get_product_variation"].path == "products/{product_id}/variations/{id}"
        assert ALL_ENDPOINTS["wc_delete_shipping_zone_method"].path_params == ("zone_id", "id")

    def test_update_fields_are_optional_except_ids(self):
        endpoint = ALL_ENDPOINTS["wc_update_product"]
        required = [f.name for f in endpoint.fields if f.required]
        assert required == ["id"]
        assert ALL_ENDPOINTS["wc_create_product"].input_schema()["required"] == ["name"]


class TestEndpointValidation:

    def test_undeclared_placeholder_rejected(self):
        with pytest.raises(ValueError, match="placeholder"):
            Endpoint("wp_get_thing", "GET", "things/{id}", "Get a thing.")

    def test_unknown_field_type_rejected(self):
        with pytest.raises(ValueError, match="unknown type"):
            Endpoint("wp_list_things", "GET", "things", "List things.", (Field("page", "int"),))

    def test_duplicate_names_rejected(self):
        endpoint = Endpoint("wp_get_settings", "GET", "settings", "Get settings.")
        with pytest.raises(ValueError, match="Duplicate"):
            index_endpoints(WORDPRESS_ENDPOINTS, [endpoint])


class TestToolDescriptors:

    def test_descriptor_shape(self):
        for tool in ALL_TOOLS:
            assert set(tool) == {"name", "description", "inputSchema"}
            schema = tool["inputSchema"]
            assert schema["type"] == "object"
            assert set(schema["required"]) <= set(schema["properties"])

    def test_description_names_route(self):
        tool = next(t for t in ALL_TOOLS if t["name"] == "wp_delete_post")
        assert tool["description"].endswith("(DELETE posts/{id})")
