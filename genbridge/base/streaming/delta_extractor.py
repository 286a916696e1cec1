"""Delta extraction for decoded stream events.

The JSON handling is shared; the schema walk is delegated to a provider
translator taking the parsed object and returning ``(text, terminal)``.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Tuple

from .streaming import DeltaResult

DeltaTranslator = Callable[[Dict[str, Any]], Tuple[str, bool]]


def extract_delta(payload: str, translator: DeltaTranslator) -> DeltaResult:
    """Extract the text fragment carried by one payload.

    Parameters:
        payload: Frame payload; never the ``[DONE]`` sentinel.
        translator: Provider schema walker returning ``(text, terminal)``.

    Returns:
        ``DeltaResult`` with ``parse_failed`` set when the payload is not a
        JSON object. Parse failures are not terminal.
    """
    try:
        data = json.loads(payload)
    except ValueError:
        return DeltaResult(parse_failed=True)
    if not isinstance(data, dict):
        return DeltaResult(parse_failed=True)
    text, terminal = translator(data)
    return DeltaResult(text=text or "", terminal=terminal)


def join_part_texts(parts: Any) -> str:
    """Concatenate the ``text`` of every part in order.

    Parts without a string ``text`` contribute nothing; a non-list value
    yields an empty string.
    """
    if not isinstance(parts, list):
        return ""
    out = []
    for part in parts:
        if isinstance(part, dict):
            text = part.get("text")
            if isinstance(text, str):
                out.append(text)
    return "".join(out)


__all__ = ["DeltaTranslator", "extract_delta", "join_part_texts"]
