"""Bundled help content (help_content.json)."""
