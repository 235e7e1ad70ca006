"""
LLM Output Parsing

Tolerant JSON decoding of model output. Unparseable content is reported as
None so the analysis validator can substitute its documented empty response.
"""

import json
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"^\s*```(?:json|JSON)?\s*\n?(.*?)\n?\s*```\s*$", re.DOTALL)


def strip_code_fences(content: str) -> str:
    """Remove a surrounding markdown code fence, if any."""
    match = _CODE_FENCE.match(content)
    if match:
        return match.group(1)
    return content


def parse_llm_json(content: str | None) -> Any | None:
    """
    Decode JSON returned by a model.

    Args:
        content: Raw message content (may be None or wrapped in ```json fences).

    Returns:
        The decoded value, or None when there is nothing decodable.
    """
    if content is None or not content.strip():
        return None
    text = strip_code_fences(content).strip()
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning("Failed to parse LLM JSON at line %d col %d: %s", e.lineno, e.colno, e.msg)
        return None
