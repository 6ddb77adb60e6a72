"""Shopware generator constants."""

from enum import Enum


class ShopwareEntity(Enum):
    PRODUCT = "product"
    MEDIA = "media"
    PROPERTY_GROUP = "property_group"
    CATEGORY = "category"
    CURRENCY = "currency"
    TAX = "tax"
    SALES_CHANNEL = "sales-channel"


class ShopwareAdminEndpoint(Enum):
    TOKEN = "/api/oauth/token"
    SYNC = "/api/_action/sync"
    SEARCH = "/api/search/{entity}"
    MEDIA_UPLOAD = "/api/_action/media/{media_id}/upload"


MIN_DIFFERENTIATORS = 3
MAX_DIFFERENTIATORS = 6
MIN_PRODUCT_REVIEWS = 5
MIN_PRODUCT_OPTIONS = 2
DEFAULT_PROPERTY_GROUP_COUNT = 2

IMAGE_EXTENSION = ".png"
IMAGE_CONTENT_TYPE = "image/png"

PRODUCT_NUMBER_PREFIX = "AI-"
PRODUCT_VISIBILITY_ALL = 30

ADMIN_CLIENT_ID = "administration"
TOKEN_SCOPE = "write"

CRAWLER_USER_AGENT = "Shopware-Data-Generator/1.0"
CRAWLER_ACCEPT = "text/html,application/xhtml+xml,application/xml"
RENDER_VIEWPORT = {"width": 1280, "height": 800}

URL_PATTERN = r"https?://\S+"
STRIPPED_ELEMENTS = "script, style, noscript, svg, nav, footer, header, aside"
TEXT_ELEMENTS = "h1, h2, h3, h4, h5, h6, p, li"
TRUNCATION_MARKER = "\n...[truncated]"

GENERATED_PRODUCTS_FILENAME = "products.json"
