"""Help registry for the danmaku scripting manuals."""

from danmaku_help.services.help.registry import (
    HelpRegistry,
    Renderer,
    PassThroughRenderer,
)
from danmaku_help.services.help.loader import (
    load_registry,
    load_bundled_registry,
    export_payload,
    get_registry,
    publish_registry,
    reset_registry,
)

__all__ = [
    "HelpRegistry",
    "Renderer",
    "PassThroughRenderer",
    "load_registry",
    "load_bundled_registry",
    "export_payload",
    "get_registry",
    "publish_registry",
    "reset_registry",
]
