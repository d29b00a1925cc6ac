"""Loading and exporting help content payloads.

The bundled content ships as package data
(danmaku_help/content/help_content.json). An external payload of the
same shape can replace it through HELP_CONTENT_PATH.
"""

import json
import logging
from importlib import resources
from pathlib import Path

from danmaku_help.lib.config import get_settings
from danmaku_help.lib.exceptions import PersistenceError, ValidationError
from danmaku_help.services.help.registry import HelpRegistry, Renderer

logger = logging.getLogger(__name__)

BUNDLED_PACKAGE = "danmaku_help.content"
BUNDLED_FILENAME = "help_content.json"


def _parse(text: str, source: str) -> dict:
    """Decode payload JSON, reporting the source on failure."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(
            f"Help payload {source} is not valid JSON: {e}", field="categories"
        ) from e


def _log_loaded(registry: HelpRegistry, source: str) -> None:
    total = sum(1 for _ in registry.iter_entries())
    logger.info(f"Loaded {len(registry)} help categories ({total} entries) from {source}")


def load_registry(path: str | Path, renderer: Renderer | None = None) -> HelpRegistry:
    """
    Load a registry from a JSON payload file.

    Args:
        path: UTF-8 JSON file in payload shape
        renderer: Optional presentation seam

    Returns:
        HelpRegistry built from the file

    Raises:
        PersistenceError: If the file cannot be read
        ValidationError: If the payload is malformed
    """
    path = Path(path)

    if not path.is_file():
        raise PersistenceError(
            f"Help content file not found: {path}", path=str(path), operation="read"
        )

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise PersistenceError(
            f"Failed to read help content: {e}", path=str(path), operation="read"
        ) from e

    registry = HelpRegistry.from_payload(_parse(text, str(path)), renderer=renderer)
    _log_loaded(registry, str(path))
    return registry


def load_bundled_registry(renderer: Renderer | None = None) -> HelpRegistry:
    """Load the help content shipped with the package."""
    text = resources.files(BUNDLED_PACKAGE).joinpath(BUNDLED_FILENAME).read_text(encoding="utf-8")
    registry = HelpRegistry.from_payload(_parse(text, BUNDLED_FILENAME), renderer=renderer)
    _log_loaded(registry, "bundled content")
    return registry


def export_payload(registry: HelpRegistry, path: str | Path) -> str:
    """
    Write the registry back out in payload shape.

    Args:
        registry: Registry to serialize
        path: Destination file (parent directories are created)

    Returns:
        str: Path where the payload was written

    Raises:
        PersistenceError: If the file cannot be written
    """
    path = Path(path)
    text = json.dumps(registry.to_payload(), indent=2, ensure_ascii=False) + "\n"

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise PersistenceError(
            f"Failed to export help content: {e}", path=str(path), operation="write"
        ) from e

    logger.info(f"Exported {len(registry)} help categories to {path}")
    return str(path)


# Process-wide registry (lazy loaded, replaced wholesale on reload)
_registry: HelpRegistry | None = None


def get_registry() -> HelpRegistry:
    """
    Get the process-wide registry.

    Loads HELP_CONTENT_PATH when configured, otherwise the bundled
    content. The instance is only published once fully built.
    """
    global _registry
    if _registry is None:
        content_file = get_settings().content_file
        if content_file is not None:
            _registry = load_registry(content_file)
        else:
            _registry = load_bundled_registry()
    return _registry


def publish_registry(registry: HelpRegistry) -> None:
    """Replace the process-wide registry with a new snapshot."""
    global _registry
    _registry = registry


def reset_registry() -> None:
    """Drop the process-wide registry (useful for testing)."""
    global _registry
    _registry = None
