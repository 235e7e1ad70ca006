"""
Paper Type Keyword Table

Methodology phrases that signal each study design. Primary phrases weigh 2,
secondary phrases weigh 1. The table is ordered: on a score tie the earlier
paper type wins.
"""

from typing import NamedTuple

from axiom.core.enums import PaperType


class KeywordSet(NamedTuple):
    primary: tuple[str, ...]
    secondary: tuple[str, ...]


PRIMARY_WEIGHT = 2
SECONDARY_WEIGHT = 1

KEYWORD_TABLE: tuple[tuple[PaperType, KeywordSet], ...] = (
    (
        PaperType.QUANTITATIVE_EXPERIMENTAL,
        KeywordSet(
            primary=(
                "randomized controlled trial", "rct", "random assignment", "randomly assigned",
                "experimental group", "control group", "intervention", "treatment group",
                "double-blind", "single-blind", "blinding", "placebo", "placebo-controlled",
                "consort", "trial registration", "clinical trial",
            ),
            secondary=(
                "experiment", "experimental design", "manipulation check",
                "controlled experiment", "between-subjects", "within-subjects",
                "factorial design",
            ),
        ),
    ),
    (
        PaperType.OBSERVATIONAL,
        KeywordSet(
            primary=(
                "cohort study", "prospective cohort", "retrospective cohort",
                "case-control study", "case-control design", "cross-sectional study",
                "cross-sectional survey", "observational study", "observational design",
                "correlational study", "correlation analysis", "strobe", "epidemiological",
                "survey", "questionnaire study", "prevalence", "incidence",
            ),
            secondary=(
                "association", "relationship between", "predictor", "predicted",
                "regression analysis", "longitudinal", "naturalistic observation",
            ),
        ),
    ),
    (
        PaperType.QUALITATIVE,
        KeywordSet(
            primary=(
                "qualitative study", "qualitative research", "interviews",
                "semi-structured interviews", "in-depth interviews", "focus groups",
                "focus group discussions", "ethnography", "ethnographic",
                "participant observation", "phenomenology", "phenomenological",
                "grounded theory", "thematic analysis", "coding", "themes emerged",
                "coreq", "saturation", "lived experience", "participant narratives",
                "reflexivity", "researcher positionality",
            ),
            secondary=(
                "thick description", "member checking", "participant validation",
                "constant comparative method", "axial coding", "open coding",
                "selective coding", "credibility", "transferability", "dependability",
                "ipa", "discourse analysis", "conversation analysis",
            ),
        ),
    ),
    (
        PaperType.SYSTEMATIC_REVIEW,
        KeywordSet(
            primary=(
                "systematic review", "systematic literature review", "meta-analysis",
                "meta-analytic", "prisma", "prisma 2020", "prospero",
                "protocol registration", "search strategy", "databases searched",
                "inclusion criteria", "exclusion criteria", "risk of bias",
                "quality assessment", "forest plot", "funnel plot",
                "effect size pooled", "pooled estimate", "heterogeneity",
            ),
            secondary=(
                "scoping review", "scoping study", "evidence synthesis",
                "grade", "certainty of evidence", "network meta-analysis",
                "living systematic review",
            ),
        ),
    ),
    (
        PaperType.MIXED_METHODS,
        KeywordSet(
            primary=(
                "mixed methods", "mixed-methods", "sequential explanatory",
                "sequential exploratory", "concurrent design", "convergent design",
                "embedded design", "integration", "mixing", "merged", "connected",
                "triangulation",
            ),
            secondary=("quan", "qual", "qualitative and quantitative"),
        ),
    ),
    (
        PaperType.CASE_REPORT,
        KeywordSet(
            primary=(
                "case report", "case study", "case presentation", "case series",
                "clinical case", "case description", "patient presentation",
                "care report", "clinical vignette", "clinical presentation",
            ),
            secondary=(
                "chief complaint", "clinical findings", "diagnostic assessment",
                "therapeutic intervention", "follow-up", "patient history",
                "timeline", "care timeline", "clinical course",
            ),
        ),
    ),
)

PAPER_TYPE_LABELS: dict[PaperType, str] = {
    PaperType.QUANTITATIVE_EXPERIMENTAL: "Quantitative Experimental",
    PaperType.OBSERVATIONAL: "Observational/Correlational",
    PaperType.QUALITATIVE: "Qualitative",
    PaperType.SYSTEMATIC_REVIEW: "Systematic Review",
    PaperType.MIXED_METHODS: "Mixed Methods",
    PaperType.CASE_REPORT: "Case Report / Case Series",
    PaperType.GENERIC: "Generic Review",
}
