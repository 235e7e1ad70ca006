"""
Section-Aware Manuscript Truncation

Shrinks long manuscripts to fit the LLM context while keeping every major
section represented. Sections are allotted space in proportion to their
length, weighted towards methods and results and away from references.
"""

import re

SECTION_HEADER = re.compile(
    r"\n\s*(abstract|introduction|background|literature review|methods|methodology"
    r"|materials and methods|results|findings|discussion|conclusion|conclusions"
    r"|limitations|references|acknowledgements|appendix|ethics|declarations?)\s*\n",
    re.IGNORECASE,
)

MIDDLE_TRUNCATED_MARKER = "\n\n[... middle section truncated for length ...]\n\n"
SECTION_TRUNCATED_MARKER = "\n[... section truncated ...]"

MIN_SECTIONS = 3
HEAD_SHARE = 0.7
TAIL_MARGIN = 100
MIN_SECTION_CHARS = 2000
MARKER_OVERHEAD = 200
MAX_PREAMBLE_CHARS = 2000

SECTION_WEIGHTS: dict[str, float] = {
    "abstract": 1.5,
    "introduction": 1.2,
    "methods": 1.5,
    "methodology": 1.5,
    "materials and methods": 1.5,
    "results": 1.5,
    "findings": 1.5,
    "discussion": 1.3,
    "conclusion": 1.0,
    "conclusions": 1.0,
    "limitations": 1.2,
    "references": 0.3,
    "acknowledgements": 0.2,
}


def find_sections(text: str) -> list[tuple[str, int, int]]:
    """Detected sections as ``(name, start, end)``; each runs to the next header."""
    sections: list[tuple[str, int, int]] = []
    for match in SECTION_HEADER.finditer(text):
        if sections:
            name, start, _ = sections[-1]
            sections[-1] = (name, start, match.start())
        sections.append((match.group(1).lower(), match.start(), len(text)))
    return sections


def _truncate_head_tail(text: str, max_chars: int) -> str:
    keep_from_start = int(max_chars * HEAD_SHARE)
    keep_from_end = max_chars - keep_from_start - TAIL_MARGIN
    return text[:keep_from_start] + MIDDLE_TRUNCATED_MARKER + text[len(text) - keep_from_end :]


def smart_truncate(text: str, max_chars: int) -> str:
    """
    Truncate ``text`` to roughly ``max_chars`` characters.

    Text within the limit is returned unchanged. With fewer than three
    recognizable section headers the head (70%) and tail are kept instead.

    Args:
        text: Full manuscript text.
        max_chars: Target length.

    Returns:
        The (possibly) truncated text with inline truncation markers.
    """
    if len(text) <= max_chars:
        return text

    sections = find_sections(text)
    if len(sections) < MIN_SECTIONS:
        return _truncate_head_tail(text, max_chars)

    min_per_section = min(MIN_SECTION_CHARS, max_chars // len(sections))
    available = max_chars - MARKER_OVERHEAD

    total_weight = sum(
        (end - start) * SECTION_WEIGHTS.get(name, 1.0) for name, start, end in sections
    )

    parts = []
    for name, start, end in sections:
        section_text = text[start:end]
        weight = len(section_text) * SECTION_WEIGHTS.get(name, 1.0)
        allocation = max(min_per_section, int(weight / total_weight * available))
        if len(section_text) <= allocation:
            parts.append(section_text)
        else:
            parts.append(section_text[:allocation] + SECTION_TRUNCATED_MARKER)

    preamble = text[: sections[0][1]]
    if preamble.strip():
        return preamble[:MAX_PREAMBLE_CHARS] + "".join(parts)
    return "".join(parts)
