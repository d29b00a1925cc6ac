"""Shared pytest fixtures for all test types."""

import pytest

from danmaku_help.lib.config import reset_settings
from danmaku_help.services.help import HelpRegistry, reset_registry


HELP_ENV_VARS = ("HELP_CONTENT_PATH", "HELP_FORUM_DB", "HELP_SYSTEM_AUTHOR", "HELP_VERBOSE")


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep environment and process-wide singletons out of each test."""
    for name in HELP_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    reset_registry()
    yield
    reset_settings()
    reset_registry()


@pytest.fixture
def sample_payload() -> dict:
    """Small payload shaped like the bundled content."""
    return {
        "categories": [
            {
                "id": "specialKeywords",
                "entries": [
                    {
                        "name": "background",
                        "content": "[b]Description:[/b] Bakes all draws to a vertex buffer.",
                    },
                    {
                        "name": "repeat",
                        "content": (
                            "[b]Description:[/b] Repeats a block of code n times.\n"
                            "[code]repeat(5)\n#createBullet(x,y,5,direction)[/code]"
                        ),
                    },
                ],
            },
            {
                "id": "danmakuHelpers",
                "entries": [
                    {
                        "name": "getDirection",
                        "threadTitle": "getDirection(x, y)",
                        "content": (
                            "[b]Description:[/b] Direction angle to a point.\n"
                            "[b][color=#ffa500]Returns:[/color][/b] degrees."
                        ),
                    },
                    {
                        "name": "background",
                        "content": "[b]Description:[/b] Helper variant of background.",
                    },
                ],
            },
            {
                "id": "mathFunctions",
                "entries": [
                    {"name": "abs(x)", "content": "[b]Description:[/b] Absolute value"},
                    {"name": "PI", "content": "[b]Description:[/b] Pi constant (3.14159...)"},
                    {"name": "tan(x)", "content": "[b]Description:[/b] Tangent (radians)"},
                ],
            },
        ]
    }


@pytest.fixture
def registry(sample_payload) -> HelpRegistry:
    """Registry built from the sample payload."""
    return HelpRegistry.from_payload(sample_payload)
