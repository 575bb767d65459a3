"""Canonical type model resolution for OpenAPI documents."""
