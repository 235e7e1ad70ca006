"""
Citation Extraction

Heuristic audit of in-text citations and the reference list: counts, style,
DOI coverage and recency of the cited literature.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone

from axiom.core.schemas import CitationReport, CitationStats, ReferenceEntry
from axiom.validation.normalizer import round_half_up

PARENTHETICAL_CITATION = re.compile(
    r"\([A-Z][a-z]+(?:\s(?:et\s+al\.?|&\s+[A-Z][a-z]+))?,?\s*\d{4}[a-z]?\)"
)
NUMERIC_CITATION = re.compile(r"\[\d+(?:[,\s-]+\d+)*\]")
REFERENCE_SECTION = re.compile(
    r"\n\s*(References|Bibliography|Works Cited|Literature Cited)\s*\n", re.IGNORECASE
)
REFERENCE_HEADER_LINE = re.compile(
    r"^(References|Bibliography|Works Cited|Literature Cited)$", re.IGNORECASE
)
YEAR = re.compile(r"\b(19|20)\d{2}[a-z]?\b")
DOI_OR_URL = re.compile(r"doi[:\s]|https?://|10\.\d{4,}", re.IGNORECASE)

MIN_LINE_CHARS = 20
MIN_ENTRY_CHARS = 30
MAX_ENTRY_CHARS = 200
MAX_REPORTED_REFERENCES = 50

MIN_DOI_PERCENT = 50
MIN_RECENT_PERCENT = 30
RECENT_YEARS = 5
STALE_YEARS = 3
MIN_REFERENCES = 10


def _parse_entry(line: str) -> ReferenceEntry:
    year_match = YEAR.search(line)
    # The year pattern may carry a disambiguating letter ("2020a")
    year = int(year_match.group(0)[:4]) if year_match else None
    return ReferenceEntry(
        text=line[:MAX_ENTRY_CHARS],
        year=year,
        has_doi_or_url=bool(DOI_OR_URL.search(line)),
    )


def parse_reference_entries(reference_text: str) -> list[ReferenceEntry]:
    """Parse one entry per substantial line of a reference section."""
    entries = []
    for line in reference_text.split("\n"):
        trimmed = line.strip()
        if len(trimmed) <= MIN_LINE_CHARS:
            continue
        if REFERENCE_HEADER_LINE.match(trimmed) or len(trimmed) < MIN_ENTRY_CHARS:
            continue
        entries.append(_parse_entry(trimmed))
    return entries


def _percent(part: int, whole: int) -> int:
    return round_half_up(part / whole * 100)


def extract_citations(text: str, current_year: int | None = None) -> CitationReport:
    """
    Audit citations in manuscript text.

    Args:
        text: Manuscript text.
        current_year: Reference year for recency checks (defaults to the
            current UTC year).

    Returns:
        CitationReport with counts, style, parsed references (at most 50)
        and human-readable issues.
    """
    current_year = current_year or datetime.now(timezone.utc).year

    parenthetical = PARENTHETICAL_CITATION.findall(text)
    numeric = NUMERIC_CITATION.findall(text)
    in_text_count = len(parenthetical) + len(numeric)

    section_match = REFERENCE_SECTION.search(text)
    has_reference_section = section_match is not None
    entries = parse_reference_entries(text[section_match.start() :]) if section_match else []

    years = [entry.year for entry in entries if entry.year is not None]
    recent_threshold = current_year - RECENT_YEARS

    issues: list[str] = []
    if in_text_count == 0:
        issues.append(
            "No in-text citations detected. Ensure citations follow (Author, Year) or [Number] format."
        )
    if not entries and not has_reference_section:
        issues.append("No References section found. Add a clearly labeled 'References' section.")

    if entries:
        doi_percent = _percent(sum(1 for e in entries if e.has_doi_or_url), len(entries))
        if doi_percent < MIN_DOI_PERCENT:
            issues.append(
                f"Only {doi_percent}% of references include DOIs or URLs. "
                "Adding DOIs improves verifiability."
            )

        if years:
            recent_percent = _percent(sum(1 for y in years if y >= recent_threshold), len(years))
            if recent_percent < MIN_RECENT_PERCENT:
                issues.append(
                    f"Only {recent_percent}% of references are from the last 5 years. "
                    "Consider adding more recent sources."
                )
            newest = max(years)
            if newest < current_year - STALE_YEARS:
                issues.append(
                    f"Most recent reference is from {newest}. "
                    "Consider updating with more current literature."
                )

        if len(entries) < MIN_REFERENCES:
            issues.append(
                f"Only {len(entries)} references found. "
                "Most journals expect 20-50 references for a full paper."
            )

    return CitationReport(
        in_text_citation_count=in_text_count,
        reference_count=len(entries),
        citation_style="numeric" if len(numeric) > len(parenthetical) else "author-year",
        has_reference_section=has_reference_section,
        references=entries[:MAX_REPORTED_REFERENCES],
        issues=issues,
        stats=CitationStats(
            with_doi=sum(1 for e in entries if e.has_doi_or_url),
            recent_five_years=sum(1 for y in years if y >= recent_threshold),
            oldest_year=min(years) if years else None,
            newest_year=max(years) if years else None,
        ),
    )
