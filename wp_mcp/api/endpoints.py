"""
Endpoint table — one row per remote REST operation

Every tool the server exposes is derived from a row here: the row names the
tool, the HTTP verb, the path template (relative to the family namespace,
``wp/v2`` or ``wc/v3``) and the declared fields. Path placeholders must name
declared fields; every other argument is forwarded as query parameters
(GET/DELETE) or as the JSON body (POST/PUT).

Naming:
  <family>_list_<plural>     GET    <path>
  <family>_get_<singular>    GET    <path>/{id}
  <family>_create_<singular> POST   <path>
  <family>_update_<singular> POST (wp) / PUT (wc) <path>/{id}
  <family>_delete_<singular> DELETE <path>/{id}
  wc_batch_<plural>          POST   <path>/batch
"""

import re
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Optional, Tuple

_PLACEHOLDER = re.compile(r"{(\w+)}")

FIELD_TYPES = ("string", "integer", "number", "boolean", "array", "object", "any")


@dataclass(frozen=True)
class Field:
    name: str
    type: str = "string"
    required: bool = False
    description: str = ""

    def optional(self) -> "Field":
        return replace(self, required=False) if self.required else self

    def schema(self) -> Dict[str, Any]:
        prop: Dict[str, Any] = {} if self.type == "any" else {"type": self.type}
        if self.description:
            prop["description"] = self.description
        return prop


@dataclass(frozen=True)
class Endpoint:
    name: str
    method: str
    path: str
    description: str
    fields: Tuple[Field, ...] = ()

    def __post_init__(self):
        declared = {f.name for f in self.fields}
        for placeholder in self.path_params:
            if placeholder not in declared:
                raise ValueError(f"{self.name}: path placeholder {{{placeholder}}} is not a declared field")
        for f in self.fields:
            if f.type not in FIELD_TYPES:
                raise ValueError(f"{self.name}: field {f.name} has unknown type {f.type!r}")

    @property
    def path_params(self) -> Tuple[str, ...]:
        return tuple(_PLACEHOLDER.findall(self.path))

    @property
    def sends_body(self) -> bool:
        return self.method in ("POST", "PUT")

    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {f.name: f.schema() for f in self.fields},
            "required": [f.name for f in self.fields if f.required],
            "additionalProperties": True,
        }


# ── shared field sets ────────────────────────────────────────────────

def _id(name: str = "id", description: str = "Resource ID", type: str = "integer") -> Field:
    return Field(name, type, required=True, description=description)


FORCE = Field("force", "boolean", description="Bypass trash and delete permanently")

LIST_FILTERS = (
    Field("page", "integer", description="Page of the collection (default 1)"),
    Field("per_page", "integer", description="Items per page (default 10, max 100)"),
    Field("search", "string", description="Limit results to those matching a string"),
    Field("order", "string", description="asc or desc"),
    Field("orderby", "string", description="Sort collection by attribute"),
)

BATCH_FIELDS = (
    Field("create", "array", description="Objects to create"),
    Field("update", "array", description="Objects to update; each must carry an id"),
    Field("delete", "array", description="IDs to delete"),
)


def _crud(
    family: str,
    plural: str,
    singular: str,
    path: str,
    label: str,
    *,
    fields: Iterable[Field] = (),
    list_fields: Iterable[Field] = LIST_FILTERS,
    delete_fields: Iterable[Field] = (FORCE,),
    update_method: str = "PUT",
    parent: Optional[Field] = None,
    ops: Tuple[str, ...] = ("list", "get", "create", "update", "delete"),
) -> List[Endpoint]:
    """Expand one resource into its list/get/create/update/delete rows."""
    fields = tuple(fields)
    scope = (parent,) if parent else ()
    item = f"{path}/{{id}}"
    item_id = _id(description=f"{label} ID")
    rows = {
        "list": Endpoint(
            f"{family}_list_{plural}", "GET", path,
            f"List {label} records. Extra arguments are forwarded as query filters.",
            scope + tuple(list_fields),
        ),
        "get": Endpoint(
            f"{family}_get_{singular}", "GET", item,
            f"Get a single {label} by ID.",
            scope + (item_id,),
        ),
        "create": Endpoint(
            f"{family}_create_{singular}", "POST", path,
            f"Create a {label}. Extra arguments are sent in the request body.",
            scope + fields,
        ),
        "update": Endpoint(
            f"{family}_update_{singular}", update_method, item,
            f"Update a {label}. Only the supplied fields are changed.",
            scope + (item_id,) + tuple(f.optional() for f in fields),
        ),
        "delete": Endpoint(
            f"{family}_delete_{singular}", "DELETE", item,
            f"Delete a {label}.",
            scope + (item_id,) + tuple(delete_fields),
        ),
    }
    return [rows[op] for op in ops]


def _batch(plural: str, path: str, label: str) -> Endpoint:
    return Endpoint(
        f"wc_batch_{plural}", "POST", f"{path}/batch",
        f"Create, update and delete {label} records in one request.",
        BATCH_FIELDS,
    )


def _report(name: str, path: str, label: str, fields: Iterable[Field] = ()) -> Endpoint:
    return Endpoint(f"wc_get_{name}_report", "GET", f"reports/{path}", f"Retrieve the {label} report.", tuple(fields))


# ══════════════════════════════════════════════════════════════════════
# WordPress core: wp/v2
# ══════════════════════════════════════════════════════════════════════

_CONTENT_FIELDS = (
    Field("title", required=True, description="Title"),
    Field("content", description="Content (HTML)"),
    Field("excerpt", description="Excerpt"),
    Field("status", description="publish, future, draft, pending or private"),
    Field("author", "integer", description="Author user ID"),
    Field("featured_media", "integer", description="Featured media ID"),
    Field("comment_status", description="open or closed"),
    Field("ping_status", description="open or closed"),
    Field("slug", description="URL slug"),
    Field("date", description="Publish date (site timezone, ISO 8601)"),
)

_POST_FIELDS = _CONTENT_FIELDS + (
    Field("categories", "array", description="Category IDs"),
    Field("tags", "array", description="Tag IDs"),
    Field("sticky", "boolean", description="Keep the post at the top of the front page"),
    Field("format", description="Post format"),
)

_PAGE_FIELDS = _CONTENT_FIELDS + (
    Field("parent", "integer", description="Parent page ID"),
    Field("menu_order", "integer", description="Order of the page"),
    Field("template", description="Theme template file"),
)

_USER_FIELDS = (
    Field("username", required=True, description="Login name"),
    Field("email", required=True, description="Email address"),
    Field("password", required=True, description="Password"),
    Field("name", description="Display name"),
    Field("first_name", description="First name"),
    Field("last_name", description="Last name"),
    Field("url", description="Website URL"),
    Field("description", description="Biographical info"),
    Field("nickname", description="Nickname"),
    Field("roles", "array", description="Role slugs"),
)

_TERM_FIELDS = (
    Field("name", required=True, description="Term name"),
    Field("description", description="Term description"),
    Field("slug", description="URL slug"),
)

_COMMENT_FIELDS = (
    Field("post", "integer", required=True, description="ID of the commented post"),
    Field("content", required=True, description="Comment content"),
    Field("author", "integer", description="Author user ID"),
    Field("author_name", description="Author display name"),
    Field("author_email", description="Author email"),
    Field("parent", "integer", description="Parent comment ID"),
    Field("status", description="approved, hold, spam or trash"),
)

_MEDIA_META = (
    Field("title", description="Attachment title"),
    Field("alt_text", description="Alternative text"),
    Field("caption", description="Caption"),
    Field("description", description="Description"),
)

WORDPRESS_ENDPOINTS: Tuple[Endpoint, ...] = tuple(
    _crud("wp", "posts", "post", "posts", "post", fields=_POST_FIELDS, update_method="POST")
    + _crud("wp", "pages", "page", "pages", "page", fields=_PAGE_FIELDS, update_method="POST")
    + _crud("wp", "media", "media", "media", "media item", fields=_MEDIA_META + (
        Field("post", "integer", description="Attach to this post ID"),
    ), update_method="POST", ops=("list", "get", "update", "delete"))
    + [
        Endpoint(
            "wp_upload_media", "POST", "media",
            "Upload a file to the media library. content is the base64-encoded file; "
            "title/alt_text/caption/description are applied in a follow-up update.",
            (
                Field("filename", required=True, description="File name, e.g. photo.png"),
                Field("content", required=True, description="Base64-encoded file content"),
                Field("content_type", required=True, description="MIME type, e.g. image/png"),
            ) + _MEDIA_META,
        ),
    ]
    + _crud("wp", "comments", "comment", "comments", "comment", fields=_COMMENT_FIELDS, update_method="POST")
    + _crud("wp", "users", "user", "users", "user", fields=_USER_FIELDS, update_method="POST", delete_fields=(
        Field("reassign", "integer", description="Reassign the deleted user's posts to this user ID"),
        FORCE,
    ))
    + _crud("wp", "categories", "category", "categories", "category", fields=_TERM_FIELDS + (
        Field("parent", "integer", description="Parent category ID"),
    ), update_method="POST")
    + _crud("wp", "tags", "tag", "tags", "tag", fields=_TERM_FIELDS, update_method="POST")
    + [
        Endpoint("wp_list_menus", "GET", "menus", "List navigation menus (requires a menu REST plugin).", LIST_FILTERS),
        Endpoint("wp_get_menu", "GET", "menus/{id}", "Get a navigation menu by ID.", (_id(description="Menu ID"),)),
        Endpoint("wp_get_settings", "GET", "settings", "Get site settings."),
        Endpoint(
            "wp_update_settings", "POST", "settings", "Update site settings.",
            (
                Field("title", description="Site title"),
                Field("description", description="Site tagline"),
                Field("timezone", description="Timezone string"),
                Field("date_format", description="Date format"),
                Field("time_format", description="Time format"),
                Field("start_of_week", "integer", description="Day number the week starts on"),
                Field("language", description="Locale code"),
                Field("posts_per_page", "integer", description="Blog pages show at most"),
                Field("default_category", "integer", description="Default post category"),
            ),
        ),
        Endpoint(
            "wp_search", "GET", "search", "Search across posts, terms and post formats.",
            (
                Field("search", required=True, description="Search string"),
                Field("type", description="post, term or post-format"),
                Field("subtype", description="Subtype, e.g. post or page"),
                Field("page", "integer", description="Page of the result set"),
                Field("per_page", "integer", description="Items per page"),
            ),
        ),
    ]
)


# ══════════════════════════════════════════════════════════════════════
# WooCommerce: wc/v3
# ══════════════════════════════════════════════════════════════════════

_PRODUCT_FIELDS = (
    Field("name", required=True, description="Product name"),
    Field("type", description="simple, grouped, external or variable"),
    Field("status", description="draft, pending, private or publish"),
    Field("featured", "boolean", description="Featured product"),
    Field("description", description="Product description"),
    Field("short_description", description="Short description"),
    Field("sku", description="Stock keeping unit"),
    Field("regular_price", description="Regular price"),
    Field("sale_price", description="Sale price"),
    Field("manage_stock", "boolean", description="Stock management at product level"),
    Field("stock_quantity", "integer", description="Stock quantity"),
    Field("stock_status", description="instock, outofstock or onbackorder"),
    Field("categories", "array", description="List of {id} objects"),
    Field("tags", "array", description="List of {id} objects"),
    Field("images", "array", description="List of image objects"),
    Field("attributes", "array", description="List of attribute objects"),
)

_VARIATION_FIELDS = (
    Field("regular_price", description="Variation regular price"),
    Field("sale_price", description="Variation sale price"),
    Field("sku", description="Stock keeping unit"),
    Field("description", description="Variation description"),
    Field("manage_stock", "boolean", description="Stock management at variation level"),
    Field("stock_quantity", "integer", description="Stock quantity"),
    Field("attributes", "array", description="List of {id|name, option} objects"),
    Field("image", "object", description="Variation image"),
)

_PRODUCT_TERM_FIELDS = (
    Field("name", required=True, description="Name"),
    Field("slug", description="URL slug"),
    Field("description", description="Description"),
)

_REVIEW_FIELDS = (
    Field("product_id", "integer", required=True, description="Reviewed product ID"),
    Field("review", required=True, description="Review content"),
    Field("reviewer", required=True, description="Reviewer name"),
    Field("reviewer_email", required=True, description="Reviewer email"),
    Field("rating", "integer", description="Rating 0-5"),
    Field("status", description="approved, hold, spam or trash"),
)

_ORDER_FIELDS = (
    Field("status", description="pending, processing, on-hold, completed, cancelled, refunded or failed"),
    Field("customer_id", "integer", description="Customer user ID"),
    Field("payment_method", description="Payment method ID"),
    Field("payment_method_title", description="Payment method title"),
    Field("set_paid", "boolean", description="Mark as paid and set status to processing"),
    Field("billing", "object", description="Billing address"),
    Field("shipping", "object", description="Shipping address"),
    Field("line_items", "array", description="Line items"),
    Field("shipping_lines", "array", description="Shipping lines"),
    Field("coupon_lines", "array", description="Coupon lines"),
    Field("customer_note", description="Note left by the customer"),
)

_CUSTOMER_FIELDS = (
    Field("email", required=True, description="Email address"),
    Field("first_name", description="First name"),
    Field("last_name", description="Last name"),
    Field("username", description="Login name"),
    Field("password", description="Password"),
    Field("billing", "object", description="Billing address"),
    Field("shipping", "object", description="Shipping address"),
)

_COUPON_FIELDS = (
    Field("code", required=True, description="Coupon code"),
    Field("discount_type", description="percent, fixed_cart or fixed_product"),
    Field("amount", description="Discount amount"),
    Field("description", description="Description"),
    Field("date_expires", description="Expiry date (ISO 8601)"),
    Field("individual_use", "boolean", description="Cannot be combined with other coupons"),
    Field("product_ids", "array", description="Product IDs the coupon applies to"),
    Field("usage_limit", "integer", description="Total usage limit"),
    Field("usage_limit_per_user", "integer", description="Usage limit per customer"),
    Field("free_shipping", "boolean", description="Grants free shipping"),
    Field("minimum_amount", description="Minimum order amount"),
    Field("maximum_amount", description="Maximum order amount"),
)

_TAX_RATE_FIELDS = (
    Field("country", description="ISO 3166 country code"),
    Field("state", description="State code"),
    Field("postcode", description="Postcode / ZIP"),
    Field("city", description="City name"),
    Field("rate", description="Tax rate"),
    Field("name", description="Tax rate name"),
    Field("priority", "integer", description="Tax priority"),
    Field("compound", "boolean", description="Compound rate"),
    Field("shipping", "boolean", description="Applied to shipping"),
    Field("order", "integer", description="Display order"),
    Field("class", description="Tax class slug"),
)

_WEBHOOK_FIELDS = (
    Field("topic", required=True, description="Webhook topic, e.g. order.created"),
    Field("delivery_url", required=True, description="URL the payload is delivered to"),
    Field("name", description="Friendly name"),
    Field("status", description="active, paused or disabled"),
    Field("secret", description="Secret used to sign the payload"),
)

_REPORT_RANGE = (
    Field("period", description="week, month, last_month or year"),
    Field("date_min", description="Start date (YYYY-MM-DD)"),
    Field("date_max", description="End date (YYYY-MM-DD)"),
)

_PRODUCT_ID = _id("product_id", "Parent product ID")
_ORDER_ID = _id("order_id", "Parent order ID")
_ZONE_ID = _id("zone_id", "Shipping zone ID")
_GROUP_ID = _id("group_id", "Settings group ID, e.g. general", type="string")

WOOCOMMERCE_ENDPOINTS: Tuple[Endpoint, ...] = tuple(
    # Products
    _crud("wc", "products", "product", "products", "product", fields=_PRODUCT_FIELDS, list_fields=LIST_FILTERS + (
        Field("status", description="Limit to a status"),
        Field("sku", description="Limit to a SKU"),
        Field("category", description="Limit to a category ID"),
        Field("featured", "boolean", description="Featured products only"),
        Field("on_sale", "boolean", description="On-sale products only"),
    ))
    + [_batch("products", "products", "product")]
    + _crud("wc", "product_variations", "product_variation", "products/{product_id}/variations",
            "product variation", fields=_VARIATION_FIELDS, parent=_PRODUCT_ID)
    + _crud("wc", "product_categories", "product_category", "products/categories", "product category",
            fields=_PRODUCT_TERM_FIELDS + (Field("parent", "integer", description="Parent category ID"),))
    + _crud("wc", "product_tags", "product_tag", "products/tags", "product tag", fields=_PRODUCT_TERM_FIELDS)
    + _crud("wc", "product_reviews", "product_review", "products/reviews", "product review", fields=_REVIEW_FIELDS)
    # Orders
    + _crud("wc", "orders", "order", "orders", "order", fields=_ORDER_FIELDS, list_fields=LIST_FILTERS + (
        Field("status", description="Limit to a status"),
        Field("customer", "integer", description="Limit to a customer ID"),
        Field("after", description="Created after (ISO 8601)"),
        Field("before", description="Created before (ISO 8601)"),
    ))
    + [_batch("orders", "orders", "order")]
    + _crud("wc", "order_notes", "order_note", "orders/{order_id}/notes", "order note", fields=(
        Field("note", required=True, description="Note content"),
        Field("customer_note", "boolean", description="Visible to the customer"),
    ), list_fields=(Field("type", description="any, customer or internal"),), parent=_ORDER_ID,
        ops=("list", "get", "create", "delete"))
    # Customers
    + _crud("wc", "customers", "customer", "customers", "customer", fields=_CUSTOMER_FIELDS, delete_fields=(
        FORCE,
        Field("reassign", "integer", description="Reassign the customer's posts to this user ID"),
    ))
    + [_batch("customers", "customers", "customer")]
    # Coupons
    + _crud("wc", "coupons", "coupon", "coupons", "coupon", fields=_COUPON_FIELDS)
    + [_batch("coupons", "coupons", "coupon")]
    # Reports
    + [
        Endpoint("wc_list_reports", "GET", "reports", "List the available reports."),
        _report("sales", "sales", "sales", _REPORT_RANGE),
        _report("top_sellers", "top_sellers", "top sellers", _REPORT_RANGE),
        _report("coupons", "coupons/totals", "coupon totals"),
        _report("customers", "customers/totals", "customer totals"),
        _report("orders", "orders/totals", "order totals"),
        _report("products", "products/totals", "product totals"),
        _report("reviews", "reviews/totals", "review totals"),
    ]
    # Taxes
    + [
        Endpoint("wc_list_tax_classes", "GET", "taxes/classes", "List tax classes."),
        Endpoint("wc_create_tax_class", "POST", "taxes/classes", "Create a tax class.", (
            Field("name", required=True, description="Tax class name"),
            Field("slug", description="Tax class slug"),
        )),
        Endpoint("wc_delete_tax_class", "DELETE", "taxes/classes/{slug}", "Delete a tax class.", (
            _id("slug", "Tax class slug", type="string"),
            FORCE,
        )),
    ]
    + _crud("wc", "tax_rates", "tax_rate", "taxes", "tax rate", fields=_TAX_RATE_FIELDS, list_fields=LIST_FILTERS + (
        Field("class", description="Limit to a tax class"),
    ))
    # Shipping
    + _crud("wc", "shipping_zones", "shipping_zone", "shipping/zones", "shipping zone", fields=(
        Field("name", required=True, description="Zone name"),
        Field("order", "integer", description="Sort order"),
    ), list_fields=())
    + _crud("wc", "shipping_zone_methods", "shipping_zone_method", "shipping/zones/{zone_id}/methods",
            "shipping zone method", fields=(
                Field("method_id", required=True, description="Shipping method ID, e.g. flat_rate"),
                Field("enabled", "boolean", description="Method enabled"),
                Field("order", "integer", description="Sort order"),
                Field("settings", "object", description="Method settings"),
            ), list_fields=(), parent=_ZONE_ID)
    # Payment gateways
    + [
        Endpoint("wc_list_payment_gateways", "GET", "payment_gateways", "List payment gateways."),
        Endpoint("wc_get_payment_gateway", "GET", "payment_gateways/{id}", "Get a payment gateway.", (
            _id(description="Gateway ID, e.g. bacs", type="string"),
        )),
        Endpoint("wc_update_payment_gateway", "PUT", "payment_gateways/{id}", "Update a payment gateway.", (
            _id(description="Gateway ID, e.g. bacs", type="string"),
            Field("enabled", "boolean", description="Gateway enabled"),
            Field("title", description="Title shown at checkout"),
            Field("description", description="Description shown at checkout"),
            Field("order", "integer", description="Sort order"),
            Field("settings", "object", description="Gateway settings"),
        )),
    ]
    # System status
    + [
        Endpoint("wc_get_system_status", "GET", "system_status", "Get the store's system status report."),
        Endpoint("wc_list_system_status_tools", "GET", "system_status/tools", "List system status tools."),
        Endpoint("wc_run_system_status_tool", "PUT", "system_status/tools/{id}", "Run a system status tool.", (
            _id(description="Tool ID, e.g. clear_transients", type="string"),
        )),
    ]
    # Settings
    + [
        Endpoint("wc_list_setting_groups", "GET", "settings", "List settings groups."),
        Endpoint("wc_list_setting_options", "GET", "settings/{group_id}", "List the options of a settings group.",
                 (_GROUP_ID,)),
        Endpoint("wc_get_setting_option", "GET", "settings/{group_id}/{id}", "Get a single setting option.", (
            _GROUP_ID,
            _id(description="Option ID", type="string"),
        )),
        Endpoint("wc_update_setting_option", "PUT", "settings/{group_id}/{id}", "Update a single setting option.", (
            _GROUP_ID,
            _id(description="Option ID", type="string"),
            Field("value", "any", required=True, description="New option value"),
        )),
        Endpoint("wc_batch_update_setting_options", "POST", "settings/{group_id}/batch",
                 "Update several options of a settings group in one request.", (
                     _GROUP_ID,
                     Field("update", "array", required=True, description="List of {id, value} objects"),
                 )),
    ]
    # Webhooks
    + _crud("wc", "webhooks", "webhook", "webhooks", "webhook", fields=_WEBHOOK_FIELDS, list_fields=LIST_FILTERS + (
        Field("status", description="all, active, paused or disabled"),
    ))
)


def index_endpoints(*tables: Iterable[Endpoint]) -> Dict[str, Endpoint]:
    """Map tool name -> endpoint; duplicate names are rejected."""
    by_name: Dict[str, Endpoint] = {}
    for table in tables:
        for endpoint in table:
            if endpoint.name in by_name:
                raise ValueError(f"Duplicate tool name: {endpoint.name}")
            by_name[endpoint.name] = endpoint
    return by_name
