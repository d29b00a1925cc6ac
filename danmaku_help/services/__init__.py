"""Service layer: help registry and forum seeding."""
