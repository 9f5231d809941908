"""
FastAPI RESTful API for managing book records.

This package provides:
- In-memory book storage
- Collection and item endpoints under /api/books
- Field validation for book payloads
- Auto-generated interactive documentation
"""
