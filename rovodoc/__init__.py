"""Read OpenAPI operations from annotated handler doc comments."""

__version__ = "0.2.1"