"""Catalog adapters, adapter selection and authentication services."""
