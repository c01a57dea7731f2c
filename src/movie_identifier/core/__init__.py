"""Identification core: models, interfaces and services."""
