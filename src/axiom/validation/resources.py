"""
Learning Resources

Curated reading for each audit topic, attached to learn links and feedback
items after validation so the model never chooses URLs itself.
"""

from __future__ import annotations

import re
from typing import NamedTuple

from axiom.core.schemas import AnalysisResponse


class Resource(NamedTuple):
    url: str
    source: str


FALLBACK_TOPIC = "writing_quality"
FALLBACK_RESOURCE = Resource(
    "https://owl.purdue.edu/owl/general_writing/academic_writing/index.html", "Purdue OWL"
)

_SPRINGER_GUIDE = "https://www.springer.com/gp/authors-editors/authorandreviewertutorials"
_SCITABLE = Resource(
    "https://www.nature.com/scitable/topicpage/scientific-papers-13815490/", "Nature Scitable"
)
_APA_STATISTICS = Resource(
    "https://apastyle.apa.org/instructional-aids/numbers-statistics-guide.pdf",
    "APA 7th Statistics Guide",
)
_APA_TABLES = Resource(
    "https://apastyle.apa.org/style-grammar-guidelines/tables-figures", "APA Tables & Figures"
)
_EQUATOR_GUIDELINES = Resource(
    "https://www.equator-network.org/reporting-guidelines/", "EQUATOR Reporting Guidelines"
)
_PHRASEBANK = Resource("https://www.phrasebank.manchester.ac.uk/", "Academic Phrasebank")
_CARE_CHECKLIST = Resource("https://www.care-statement.org/checklist", "CARE Checklist")
_WILEY_PREPARE = Resource(
    "https://authorservices.wiley.com/author-resources/Journal-Authors/Prepare/index.html", "Wiley"
)
_SPRINGER_STRUCTURE = Resource(
    f"{_SPRINGER_GUIDE}/writing-a-journal-manuscript/overview/10285518", "Springer"
)
_SPRINGER_COVER_LETTER = Resource(
    f"{_SPRINGER_GUIDE}/submitting-to-a-journal/cover-letters/10285726", "Springer"
)

LEARN_RESOURCES: dict[str, list[Resource]] = {
    "title": [
        Resource(
            "https://wildlife.onlinelibrary.wiley.com/doi/full/10.1002/jwmg.21881",
            "Wiley — Title Optimization",
        ),
        _SCITABLE,
    ],
    "abstract": [
        Resource("https://pmc.ncbi.nlm.nih.gov/articles/PMC3136027/", "PMC — Abstract Writing"),
        Resource(
            f"{_SPRINGER_GUIDE}/writing-a-journal-manuscript/writing-abstracts/10285522",
            "Springer",
        ),
    ],
    "keywords": [
        Resource(
            "https://library.mskcc.org/blog/2016/10/mesh-on-demand-tool-an-easy-way-to-identify-relevant-mesh-terms/",
            "MeSH on Demand",
        ),
        Resource("https://meshb.nlm.nih.gov/", "MeSH Browser"),
    ],
    "introduction": [
        Resource("https://libguides.usc.edu/writingguide/CARS", "USC — CARS Model"),
        _SCITABLE,
    ],
    "methods": [
        Resource("https://www.equator-network.org/", "EQUATOR Network"),
        _EQUATOR_GUIDELINES,
        Resource(
            "https://www.nature.com/nature-portfolio/editorial-policies/reporting-standards",
            "Nature Reporting Standards",
        ),
    ],
    "results": [_APA_STATISTICS, _APA_TABLES],
    "discussion": [
        Resource("https://libguides.usc.edu/writingguide/discussion", "USC — Discussion Section"),
        Resource("https://onlinelibrary.wiley.com/doi/10.1111/jan.14311", "Wiley — Causal Language"),
    ],
    "limitations": [
        Resource(
            "https://proofreading.org/learning-center/how-to-frame-limitations-and-future-research-directions/",
            "Cambridge Proofreading",
        ),
    ],
    "conclusions": [
        Resource(
            "https://owl.purdue.edu/owl/general_writing/common_writing_assignments/research_papers/writing_a_research_paper.html",
            "Purdue OWL",
        ),
        _SPRINGER_STRUCTURE,
    ],
    "writing_quality": [
        _PHRASEBANK,
        FALLBACK_RESOURCE,
        Resource("https://apastyle.apa.org/", "APA Style"),
    ],
    "zero_i": [
        Resource(
            "https://owl.purdue.edu/owl/general_writing/academic_writing/active_and_passive_voice/index.html",
            "Purdue OWL — Voice",
        ),
        _PHRASEBANK,
    ],
    "statistics": [
        _APA_STATISTICS,
        Resource("https://www.equator-network.org/reporting-guidelines/", "EQUATOR Network"),
        Resource("https://www.nature.com/articles/nmeth.2738", "Nature Methods — Statistics"),
    ],
    "ethics": [
        Resource("https://publicationethics.org/", "COPE Guidelines"),
        Resource("https://www.icmje.org/recommendations/", "ICMJE Recommendations"),
        Resource("https://credit.niso.org/contributor-roles-defined/", "CRediT Roles"),
    ],
    "ai_disclosure": [
        Resource("https://www.nature.com/nature-portfolio/editorial-policies/ai", "Nature AI Policy"),
        Resource(
            "https://publicationethics.org/cope-position-statements/ai-author", "COPE AI Position"
        ),
    ],
    "references": [
        Resource("https://owl.purdue.edu/owl/research_and_citation/resources.html", "Purdue OWL"),
        Resource(
            "https://apastyle.apa.org/style-grammar-guidelines/references", "APA Style References"
        ),
    ],
    "figures_tables": [
        _APA_TABLES,
        Resource(
            "https://www.nature.com/nature-portfolio/editorial-policies/image-integrity",
            "Nature Image Integrity",
        ),
        Resource("https://colororacle.org/", "Color Oracle — Accessibility"),
    ],
    "reporting_guidelines": [
        Resource("https://pmc.ncbi.nlm.nih.gov/articles/PMC11996237/", "CONSORT 2025"),
        Resource("https://pmc.ncbi.nlm.nih.gov/articles/PMC8007028/", "PRISMA 2020"),
        Resource(
            "https://journals.plos.org/plosmedicine/article?id=10.1371/journal.pmed.0040297",
            "STROBE",
        ),
        _CARE_CHECKLIST,
    ],
    "case_report": [
        _CARE_CHECKLIST,
        Resource("https://www.care-statement.org/writing-guide", "CARE Writing Guide"),
        Resource("https://www.scareguideline.com/", "SCARE Surgical Guidelines"),
    ],
    "structure": [_SCITABLE, _SPRINGER_STRUCTURE],
    "submission": [_SPRINGER_COVER_LETTER, _WILEY_PREPARE],
    "cover_letter": [_SPRINGER_COVER_LETTER],
    "reviewer_response": [
        Resource(f"{_SPRINGER_GUIDE}/submitting-to-a-journal/revision-and-appeals/10285730", "Springer"),
        _WILEY_PREPARE,
    ],
}

_SEPARATORS = re.compile(r"[\s&]+")
_NON_KEY_CHARS = re.compile(r"[^a-z_]")


def topic_key(topic: str) -> str:
    """Normalize a free-text topic ("Figures & Tables") to a table key ("figures_tables")."""
    return _NON_KEY_CHARS.sub("", _SEPARATORS.sub("_", topic.lower()))


def resolve_resource(topic: str) -> Resource:
    """First curated resource for ``topic``, falling back to writing quality."""
    matches = LEARN_RESOURCES.get(topic_key(topic)) or LEARN_RESOURCES[FALLBACK_TOPIC]
    return matches[0] if matches else FALLBACK_RESOURCE


def enrich_resources(response: AnalysisResponse) -> AnalysisResponse:
    """
    Attach curated URLs to learn links and feedback items.

    Learn links resolve by ``topic``; feedback items by ``resource_topic``
    (or ``section`` when the topic is blank).
    """
    learn_links = []
    for link in response.learn_links:
        resource = resolve_resource(link.topic)
        learn_links.append(link.model_copy(update={"url": resource.url, "source": resource.source}))

    feedback = []
    for item in response.detailed_feedback:
        resource = resolve_resource(item.resource_topic or item.section)
        feedback.append(
            item.model_copy(
                update={"resource_url": resource.url, "resource_source": resource.source}
            )
        )

    return response.model_copy(update={"learn_links": learn_links, "detailed_feedback": feedback})
