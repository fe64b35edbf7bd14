"""Surrogacy agency admin API."""
