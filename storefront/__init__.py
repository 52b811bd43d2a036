"""Storefront backend: session carts and administrator-managed member accounts."""
