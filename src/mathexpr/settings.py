"""Parser settings, optionally loaded from ``mathexpr.yaml``."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field

CONFIG_FILENAME = "mathexpr.yaml"


class ParserSettings(BaseModel):
    """Knobs that change how expression text is parsed.

    Attributes:
        max_depth: Deepest allowed nesting of parenthesized groups.
        max_height: Deepest allowed expression tree.  Operator and function
            chains deepen the tree without any group, and every tree walker
            recurses once per level.
        unknown_characters: ``"skip"`` ignores characters that cannot start
            a symbol; ``"reject"`` raises ``UnexpectedCharacter``.
        log_dir: Directory whose ``logs/`` subfolder receives structured
            events.  ``None`` disables event logging.
    """

    max_depth: int = Field(default=100, ge=1)
    max_height: int = Field(default=250, ge=1)
    unknown_characters: Literal["skip", "reject"] = "skip"
    log_dir: str | None = None


DEFAULT_SETTINGS = ParserSettings()


def load_settings(path: Path) -> ParserSettings:
    """Load settings from a YAML file, with defaults.

    Args:
        path: A YAML file, or a directory containing ``mathexpr.yaml``.

    Returns:
        Settings merged over the defaults.  A missing file yields the
        defaults.

    Raises:
        pydantic.ValidationError: If a value has the wrong type or range.
    """
    path = Path(path)
    if path.is_dir():
        path = path / CONFIG_FILENAME
    config: dict[str, Any] = DEFAULT_SETTINGS.model_dump()
    if path.exists():
        user_config = yaml.safe_load(path.read_text())
        if user_config is None:
            user_config = {}
        if not isinstance(user_config, dict):
            # a top-level list or scalar fails validation as a non-mapping
            return ParserSettings.model_validate(user_config)
        config.update(user_config)
    return ParserSettings.model_validate(config)


def configure(settings: ParserSettings) -> None:
    """Apply process-wide side effects of *settings* (the event sink)."""
    from mathexpr.logging import set_log_dir

    set_log_dir(settings.log_dir)
