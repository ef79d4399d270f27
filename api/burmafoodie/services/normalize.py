import json
import re
from typing import Any

# One outer fence, optional language tag on the opening line.
_FENCE_RE = re.compile(r"^```(\w*)?\s*\n?(.*?)\n?\s*```$", re.DOTALL)
_TRAILING_COMMA_RE = re.compile(r",\s*([}\]])")


def strip_code_fence(text: str) -> str:
    match = _FENCE_RE.match(text)
    if match and match.group(2):
        return match.group(2).strip()
    return text


def remove_trailing_commas(text: str) -> str:
    """Drop commas that sit directly before a closing brace or bracket.

    Operates on raw text, so only apply it to text that failed to parse.
    """
    return _TRAILING_COMMA_RE.sub(r"\1", text)


def normalize_model_text(raw: str) -> str:
    """Trim and strip one outer code fence."""
    text = (raw or "").strip()
    return strip_code_fence(text)


def parse_model_json(raw: str) -> Any:
    """Normalize a raw model reply and decode it.

    Trailing commas are removed only when the text does not parse as is.
    Raises ``ValueError`` on an empty reply and ``json.JSONDecodeError``
    (a ``ValueError``) when the repaired text is still not JSON.
    """
    text = normalize_model_text(raw)
    if not text:
        raise ValueError("Empty model reply")
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return json.loads(remove_trailing_commas(text))
