"""Product Catalog API - CRUD service over a relational product store."""

__version__ = "0.1.0"
