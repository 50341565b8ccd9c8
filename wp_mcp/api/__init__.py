"""REST clients, endpoint table and error types for the remote WordPress site."""

from .client import RestClient, WooCommerceClient, WordPressClient
from .endpoints import WOOCOMMERCE_ENDPOINTS, WORDPRESS_ENDPOINTS, Endpoint, Field
from .errors import ToolArgumentError, WPAPIError, WPError, WPTransportError
