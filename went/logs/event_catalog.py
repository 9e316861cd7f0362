"""Human readable text for logged events, keyed by ``(domain, action)``.

Templates live in ``event_templates.json`` next to this module, one object per
domain. ``EVENT_TEMPLATES`` is updated in place on reload so references to it
stay valid.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path

TEMPLATES_PATH = Path(__file__).with_name("event_templates.json")

EVENT_TEMPLATES: dict[tuple[str, str], str] = {}


def _flatten(raw: object) -> dict[tuple[str, str], str]:
    if not isinstance(raw, Mapping):
        return {}
    return {
        (domain, action): text
        for domain, actions in raw.items()
        if isinstance(domain, str) and isinstance(actions, Mapping)
        for action, text in actions.items()
        if isinstance(action, str) and isinstance(text, str)
    }


def _load_event_templates(path: Path | None = None) -> dict[tuple[str, str], str]:
    path = path or TEMPLATES_PATH
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {("app", "load_error"): "Event templates file missing"}
    except (OSError, ValueError) as e:
        return {("app", "load_error"): f"Failed to load event templates: {e}"[:200]}
    return _flatten(raw)


def reload_event_templates(path: Path | None = None) -> None:
    templates = _load_event_templates(path)
    EVENT_TEMPLATES.clear()
    EVENT_TEMPLATES.update(templates)


reload_event_templates()

__all__ = ["EVENT_TEMPLATES", "TEMPLATES_PATH", "reload_event_templates"]
