"""
Catalog API: Services Layer
=============================

Service Inventory:
    - CategoryService: category CRUD and category lookups
    - ProductService:  product CRUD with category expansion
    - CascadeDeleter:  removes a deleted category's products
"""
