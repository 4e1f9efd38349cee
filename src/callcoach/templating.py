"""{{dotted.path}} placeholder substitution for scenario and prompt text.

Unresolved placeholders are left in place rather than raising, so a
partially configured company still yields a usable prompt. Callers that
want strictness can check `validate_template` or the `unresolved_paths`
of `render_template` first.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

PLACEHOLDER_RE = re.compile(r"\{\{([^}]+)\}\}")

_MISSING = object()


@dataclass
class TemplateResult:
    resolved: str
    unresolved_paths: list[str] = field(default_factory=list)


@dataclass
class TemplateValidation:
    valid: bool
    missing: list[str] = field(default_factory=list)


def get_nested_value(obj: Any, path: str) -> Any:
    """Walk `path` ("company.pricing.quarterlyPrice") through dicts or attributes.

    Returns None when any segment is missing.
    """
    value = _lookup(obj, path)
    return None if value is _MISSING else value


def _lookup(obj: Any, path: str) -> Any:
    if obj is None or not path:
        return _MISSING

    current = obj
    for part in path.split("."):
        if current is None:
            return _MISSING
        if isinstance(current, dict):
            if part not in current:
                return _MISSING
            current = current[part]
        elif isinstance(current, (list, tuple)) and part.isdigit():
            index = int(part)
            if index >= len(current):
                return _MISSING
            current = current[index]
        elif hasattr(current, part):
            current = getattr(current, part)
        else:
            return _MISSING
    return current


def _to_str(value: Any) -> str:
    # Match JSON-ish rendering for booleans
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_to_str(v) for v in value)
    return str(value)


def render_template(template: str, context: Any) -> TemplateResult:
    """Substitute every resolvable placeholder and report the ones left over."""
    if not template or not isinstance(template, str):
        return TemplateResult(resolved=template)

    unresolved: list[str] = []

    def _replace(match: re.Match) -> str:
        path = match.group(1).strip()
        value = _lookup(context, path)
        if value is _MISSING or value is None:
            unresolved.append(path)
            return match.group(0)
        return _to_str(value)

    resolved = PLACEHOLDER_RE.sub(_replace, template)
    return TemplateResult(resolved=resolved, unresolved_paths=unresolved)


def process_template(template: str, context: Any) -> str:
    """Return `template` with placeholders resolved against `context`."""
    return render_template(template, context).resolved


def process_object_templates(obj: Any, context: Any) -> Any:
    """Apply `process_template` to every string inside nested dicts and lists."""
    if isinstance(obj, str):
        return process_template(obj, context)
    if isinstance(obj, list):
        return [process_object_templates(item, context) for item in obj]
    if isinstance(obj, dict):
        return {key: process_object_templates(value, context) for key, value in obj.items()}
    return obj


def extract_template_variables(template: str) -> list[str]:
    if not template or not isinstance(template, str):
        return []
    return [m.group(1).strip() for m in PLACEHOLDER_RE.finditer(template)]


def validate_template(template: str, context: Any) -> TemplateValidation:
    """Check that every placeholder in `template` resolves against `context`."""
    missing = [
        path
        for path in extract_template_variables(template)
        if _lookup(context, path) is _MISSING
    ]
    return TemplateValidation(valid=not missing, missing=missing)
