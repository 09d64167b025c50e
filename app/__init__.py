"""Catalog administration API package."""
