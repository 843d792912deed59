"""
Catalog API: Routes Package
=============================

Route Inventory:
    - categories.py:  /category, /category/create, /category/{id}
    - products.py:    /products, /products/{id}, /category/{id}/products,
                      /category/product/create,
                      /category/{categoryId}/products/{productId}
    - health.py:      /health

Routes handle HTTP only; store logic lives in catalog.services.
"""
