"""
Unit Tests for Learning Resource Enrichment
"""

import pytest

from axiom.core.schemas import FeedbackItem, LearnLink
from axiom.validation.normalizer import normalize_analysis
from axiom.validation.resources import (
    FALLBACK_TOPIC,
    LEARN_RESOURCES,
    enrich_resources,
    resolve_resource,
    topic_key,
)


class TestTopicKey:
    @pytest.mark.parametrize(
        "topic,expected",
        [
            ("Methods", "methods"),
            ("Figures & Tables", "figures_tables"),
            ("writing quality", "writing_quality"),
            ("AI Disclosure", "ai_disclosure"),
            ("Zero-I", "zeroi"),
        ],
    )
    def test_normalizes(self, topic: str, expected: str) -> None:
        assert topic_key(topic) == expected


class TestResolveResource:
    def test_known_topic(self) -> None:
        assert resolve_resource("methods").source == "EQUATOR Network"
        assert resolve_resource("Figures & Tables").source == "APA Tables & Figures"

    def test_unknown_topic_falls_back(self) -> None:
        assert resolve_resource("astrology") == LEARN_RESOURCES[FALLBACK_TOPIC][0]

    def test_every_topic_has_https_resources(self) -> None:
        for topic, resources in LEARN_RESOURCES.items():
            assert resources, topic
            assert all(r.url.startswith("https://") for r in resources), topic


class TestEnrichResources:
    """Tests for enrich_resources."""

    def test_links_and_feedback_enriched(self, raw_analysis: dict) -> None:
        response = enrich_resources(normalize_analysis(raw_analysis))
        assert response.learn_links[0].source == "CONSORT 2025"
        assert response.learn_links[0].url.startswith("https://pmc.ncbi.nlm.nih.gov/")
        assert response.detailed_feedback[0].resource_source == "EQUATOR Network"
        assert response.detailed_feedback[0].resource_url == "https://www.equator-network.org/"

    def test_model_supplied_urls_replaced(self) -> None:
        response = normalize_analysis(
            {
                "learnLinks": [
                    {"title": "Dubious", "topic": "statistics", "url": "http://spam.example"}
                ]
            }
        )
        link = enrich_resources(response).learn_links[0]
        assert link.url == LEARN_RESOURCES["statistics"][0].url
        assert link.title == "Dubious"

    def test_section_used_when_topic_blank(self) -> None:
        response = normalize_analysis({}).model_copy(
            update={"detailed_feedback": [FeedbackItem(section="Statistics", finding="x", resource_topic="")]}
        )
        item = enrich_resources(response).detailed_feedback[0]
        assert item.resource_source == "APA 7th Statistics Guide"

    def test_input_untouched(self) -> None:
        response = normalize_analysis({}).model_copy(
            update={"learn_links": [LearnLink(title="T", topic="ethics")]}
        )
        enrich_resources(response)
        assert response.learn_links[0].url == ""
