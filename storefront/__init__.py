"""Storefront core: categories, products, coupons and the order lifecycle."""
