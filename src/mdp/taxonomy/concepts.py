"""Static medical/longevity concept taxonomy.

Every concept lives in one flat table and carries its tier as an
attribute. The tier does not enter the scoring formula; it only lets
callers filter the table (``concepts_by_tier``). Weights and surface
forms are fixed at import time.
"""

from typing import Dict, Iterable, List

from ..core.errors import TaxonomyError
from ..core.models import ConceptTier, MedicalConcept


_PRIMARY = [
    MedicalConcept(
        name="MITOCHONDRIA",
        tier=ConceptTier.PRIMARY,
        aliases=["mitochondrial", "mitochondrion", "OXPHOS", "ATP", "electron transport"],
        co_terms=["energy", "cellular respiration", "Complex I", "Complex IV"],
        weight=1.0,
    ),
    MedicalConcept(
        name="SENESCENCE",
        tier=ConceptTier.PRIMARY,
        aliases=["cellular senescence", "senescent", "aging", "age-related"],
        co_terms=["p16", "p21", "telomere", "autophagy"],
        weight=0.95,
    ),
    MedicalConcept(
        name="NAD_METABOLISM",
        tier=ConceptTier.PRIMARY,
        aliases=["NAD+", "NAD", "nicotinamide adenine", "NADH", "sirtuin"],
        co_terms=["mitochondria", "energy", "aging", "longevity"],
        weight=0.98,
    ),
    MedicalConcept(
        name="PLASMA_EXCHANGE",
        tier=ConceptTier.PRIMARY,
        aliases=["plasmapheresis", "plasma exchange", "apheresis", "TPE"],
        co_terms=["antibodies", "autoimmune", "therapeutic"],
        weight=0.92,
    ),
    MedicalConcept(
        name="STEM_CELLS",
        tier=ConceptTier.PRIMARY,
        aliases=["mesenchymal stem cells", "MSC", "hematopoietic", "pluripotent"],
        co_terms=["regeneration", "tissue repair", "differentiation"],
        weight=0.90,
    ),
    MedicalConcept(
        name="PHOTOBIOMODULATION",
        tier=ConceptTier.PRIMARY,
        aliases=["red light therapy", "PBM", "light therapy", "phototherapy"],
        co_terms=["mitochondria", "cytochrome c oxidase", "ATP"],
        weight=0.88,
    ),
    MedicalConcept(
        name="CAR_T_CELLS",
        tier=ConceptTier.PRIMARY,
        aliases=["CAR-T", "chimeric antigen receptor", "adoptive cell therapy"],
        co_terms=["cancer", "immunotherapy", "engineering"],
        weight=0.85,
    ),
    MedicalConcept(
        name="IMMUNOTHERAPY",
        tier=ConceptTier.PRIMARY,
        aliases=["checkpoint inhibitor", "PD-1", "PD-L1", "CTLA-4", "immune checkpoint"],
        co_terms=["cancer", "antibody", "T cell"],
        weight=0.87,
    ),
    MedicalConcept(
        name="EXOSOMES",
        tier=ConceptTier.PRIMARY,
        aliases=["extracellular vesicles", "EVs", "microvesicles", "exosome therapy"],
        co_terms=["regeneration", "signaling", "delivery"],
        weight=0.83,
    ),
    MedicalConcept(
        name="LONGEVITY",
        tier=ConceptTier.PRIMARY,
        aliases=["lifespan", "healthspan", "life extension", "anti-aging"],
        co_terms=["aging", "senescence", "disease prevention"],
        weight=0.91,
    ),
]

_SECONDARY = [
    MedicalConcept(
        name="AUTOPHAGY",
        tier=ConceptTier.SECONDARY,
        aliases=["macroautophagy", "chaperone-mediated autophagy", "mTOR"],
        co_terms=["cellular cleanup", "aging", "disease"],
        weight=0.75,
    ),
    MedicalConcept(
        name="TELOMERES",
        tier=ConceptTier.SECONDARY,
        aliases=["telomere", "telomerase", "TERT"],
        co_terms=["aging", "senescence", "replicative limit"],
        weight=0.78,
    ),
    MedicalConcept(
        name="EPIGENETICS",
        tier=ConceptTier.SECONDARY,
        aliases=["DNA methylation", "histone modification", "epigenetic clock"],
        co_terms=["aging", "gene expression", "reversibility"],
        weight=0.72,
    ),
    MedicalConcept(
        name="METABOLIC_HEALTH",
        tier=ConceptTier.SECONDARY,
        aliases=["metabolic syndrome", "insulin sensitivity", "glucose metabolism"],
        co_terms=["aging", "disease", "mitochondria"],
        weight=0.70,
    ),
    MedicalConcept(
        name="INFLAMMATION",
        tier=ConceptTier.SECONDARY,
        aliases=["inflammaging", "chronic inflammation", "cytokine"],
        co_terms=["aging", "disease", "immune"],
        weight=0.73,
    ),
    MedicalConcept(
        name="PROTEIN_FOLDING",
        tier=ConceptTier.SECONDARY,
        aliases=["proteostasis", "chaperone", "unfolded protein response"],
        co_terms=["aging", "neurodegeneration", "disease"],
        weight=0.68,
    ),
]

_INTERVENTIONS = [
    MedicalConcept(
        name="SENOLYTICS",
        tier=ConceptTier.INTERVENTION,
        aliases=["senolytic", "senescent cell clearance"],
        co_terms=["aging", "clearance", "treatment"],
        weight=0.85,
        examples=["dasatinib", "quercetin", "fisetin"],
    ),
    MedicalConcept(
        name="NAD_BOOSTERS",
        tier=ConceptTier.INTERVENTION,
        aliases=["NAD+ precursor", "NMN", "NR", "nicotinamide riboside"],
        co_terms=["NAD+", "supplement", "longevity"],
        weight=0.90,
        examples=["NMN", "NR", "NADH"],
    ),
    MedicalConcept(
        name="RAPAMYCIN",
        tier=ConceptTier.INTERVENTION,
        aliases=["mTOR inhibitor", "sirolimus"],
        co_terms=["mTOR", "autophagy", "longevity"],
        weight=0.82,
        examples=["rapamycin", "everolimus"],
    ),
    MedicalConcept(
        name="METFORMIN",
        tier=ConceptTier.INTERVENTION,
        aliases=["biguanide", "anti-diabetic"],
        co_terms=["diabetes", "longevity", "metabolic"],
        weight=0.75,
        examples=["metformin"],
    ),
    MedicalConcept(
        name="CALORIC_RESTRICTION",
        tier=ConceptTier.INTERVENTION,
        aliases=["CR", "intermittent fasting", "IF", "time-restricted eating"],
        co_terms=["fasting", "longevity", "metabolic"],
        weight=0.78,
        examples=["fasting", "caloric restriction"],
    ),
]


def build_taxonomy(concepts: Iterable[MedicalConcept]) -> Dict[str, MedicalConcept]:
    """Index concepts by name, rejecting names that appear twice.

    Raises:
        TaxonomyError: If two concepts share a name, whatever their tier.
    """
    table: Dict[str, MedicalConcept] = {}
    for concept in concepts:
        if concept.name in table:
            raise TaxonomyError(
                f"Duplicate concept name {concept.name!r} "
                f"({table[concept.name].tier.value} vs {concept.tier.value})"
            )
        table[concept.name] = concept
    return table


TAXONOMY: Dict[str, MedicalConcept] = build_taxonomy([*_PRIMARY, *_SECONDARY, *_INTERVENTIONS])


def concepts_by_tier(tier: ConceptTier, taxonomy: Dict[str, MedicalConcept] = TAXONOMY) -> List[MedicalConcept]:
    """Concepts of one tier, in declaration order."""
    return [c for c in taxonomy.values() if c.tier == tier]
