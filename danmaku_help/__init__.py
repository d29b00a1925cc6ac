"""Help registry and forum manuals for the danmaku scripting language."""

__version__ = "0.1.0"
