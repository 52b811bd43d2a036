"""
FastAPI Routers Package

Routers are included by api/index.py:
- storefront.routers.webapp: public storefront endpoints (cart)
- storefront.routers.admin: administrator-only endpoints (users, members page)
"""
