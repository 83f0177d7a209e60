"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real shop
os.environ.setdefault("SHOPIFY_SHOP_DOMAIN", "test-shop.myshopify.com")
os.environ.setdefault("SHOPIFY_ADMIN_ACCESS_TOKEN", "shpat_test_fake_token")
os.environ.setdefault("LOG_FORMAT", "text")
