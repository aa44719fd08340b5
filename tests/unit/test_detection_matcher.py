"""Unit tests for weighted alias matching."""

import pytest

from mdp.core.models import ConceptTier, MedicalConcept
from mdp.detection.matcher import PatternMatcher, compile_alias
from mdp.taxonomy.concepts import build_taxonomy


@pytest.fixture
def matcher() -> PatternMatcher:
    return PatternMatcher()


def _concept(name: str, aliases, weight: float = 0.5, examples=None) -> MedicalConcept:
    return MedicalConcept(
        name=name,
        tier=ConceptTier.INTERVENTION if examples else ConceptTier.PRIMARY,
        aliases=list(aliases),
        weight=weight,
        examples=list(examples or []),
    )


class TestCompileAlias:
    """Tests for alias pattern construction."""

    def test_plus_sign_is_literal(self) -> None:
        """'NAD+' must not be read as a regex quantifier."""
        pattern = compile_alias("NAD+")
        assert len(pattern.findall("NAD+")) == 1
        assert pattern.search("NADD") is None

    def test_parentheses_and_dots_are_literal(self) -> None:
        pattern = compile_alias("Q10 (ubiquinone).")
        assert pattern.search("take Q10 (ubiquinone). daily")
        assert pattern.search("take Q10 ubiquinone daily") is None

    def test_whole_token_only(self) -> None:
        pattern = compile_alias("ATP")
        assert pattern.search("ATPase activity") is None
        assert pattern.search("cellular ATP levels")

    def test_case_insensitive(self) -> None:
        assert compile_alias("CoQ10").search("coq10 supplementation")


class TestScoreConceptHits:
    """Tests for PatternMatcher.score_concept_hits."""

    def test_single_alias_concept_counts_once(self) -> None:
        """A custom concept whose only alias is 'NAD+' matches the literal once."""
        custom = PatternMatcher(build_taxonomy([_concept("NAD_ONLY", ["NAD+"], weight=0.5)]))
        assert custom.score_concept_hits("NAD+") == {"NAD_ONLY": pytest.approx(0.5)}

    def test_count_times_weight(self, matcher: PatternMatcher) -> None:
        hits = matcher.score_concept_hits("Mitochondrial dysfunction and MITOCHONDRIAL decline")
        assert hits == {"MITOCHONDRIA": pytest.approx(2.0)}

    def test_overlapping_aliases_of_same_concept_both_count(self, matcher: PatternMatcher) -> None:
        """'NAD+' matches both the 'NAD+' and 'NAD' aliases of NAD_METABOLISM."""
        hits = matcher.score_concept_hits("NAD+")
        assert hits == {"NAD_METABOLISM": pytest.approx(2 * 0.98)}

    def test_counts_do_not_leak_between_concepts(self, matcher: PatternMatcher) -> None:
        """'NADH' is an alias of one concept and an example of another."""
        hits = matcher.score_concept_hits("NADH")
        assert hits == {
            "NAD_METABOLISM": pytest.approx(0.98),
            "NAD_BOOSTERS": pytest.approx(0.90),
        }

    def test_intervention_examples_are_scored(self, matcher: PatternMatcher) -> None:
        hits = matcher.score_concept_hits("Rapamycin extends lifespan in mice")
        assert hits == {"RAPAMYCIN": pytest.approx(0.82), "LONGEVITY": pytest.approx(0.91)}

    def test_unmatched_concepts_are_omitted(self, matcher: PatternMatcher) -> None:
        hits = matcher.score_concept_hits("telomerase")
        assert set(hits) == {"TELOMERES"}
        assert all(v > 0 for v in hits.values())

    def test_empty_text(self, matcher: PatternMatcher) -> None:
        assert matcher.score_concept_hits("") == {}

    def test_hits_match_occurrence_count_times_weight(self, matcher: PatternMatcher) -> None:
        text = "telomere telomere telomerase TERT and quercetin plus fisetin"
        counts = matcher.count_occurrences(text)
        hits = matcher.score_concept_hits(text)
        assert counts == {"TELOMERES": 4, "SENOLYTICS": 2}
        for name, value in hits.items():
            assert value == pytest.approx(counts[name] * matcher.taxonomy[name].weight)


class TestExtractMedicalTerms:
    """Tests for PatternMatcher.extract_medical_terms."""

    def test_lowercased_names(self, matcher: PatternMatcher) -> None:
        terms = matcher.extract_medical_terms("Mitochondrial decline and telomere attrition")
        assert terms == {"mitochondria", "telomeres"}

    def test_terms_agree_with_hits(self, matcher: PatternMatcher) -> None:
        for text in ["NADH", "metformin and sirolimus", "extracellular vesicles", "nothing relevant"]:
            hits = matcher.score_concept_hits(text)
            assert matcher.extract_medical_terms(text) == {k.lower() for k in hits}

    def test_empty_text(self, matcher: PatternMatcher) -> None:
        assert matcher.extract_medical_terms("") == set()


def test_matched_forms_lists_surface_forms(matcher: PatternMatcher) -> None:
    forms = matcher.matched_forms("dasatinib plus quercetin", "SENOLYTICS")
    assert forms == ["dasatinib", "quercetin"]
    assert matcher.matched_forms("dasatinib", "UNKNOWN_CONCEPT") == []
