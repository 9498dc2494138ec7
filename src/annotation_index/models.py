"""Data models for raw variant annotation records.

The summary index only reads annotation records through the narrow protocols
below. The pydantic models are the concrete record type used by the loaders
and the CLI; any object exposing the same attributes can be summarized.
"""

from typing import Iterable, Protocol

from pydantic import BaseModel, Field


class XrefLike(Protocol):
    id: str


class ScoreLike(Protocol):
    score: float


class ConsequenceTypeLike(Protocol):
    sift: ScoreLike | None
    polyphen: ScoreLike | None
    so_accessions: Iterable[int] | None


class AnnotationSource(Protocol):
    """Anything a summary can be built from or concatenated with."""

    vep_version: str
    vep_cache_version: str
    xrefs: Iterable[XrefLike]
    consequence_types: Iterable[ConsequenceTypeLike]


class Score(BaseModel):
    """Prediction score (SIFT or PolyPhen) for one consequence type."""

    score: float
    description: str | None = None


class Xref(BaseModel):
    """Cross-reference to an external database entry."""

    id: str
    src: str | None = None


class ConsequenceType(BaseModel):
    """Predicted consequence of a variant on one transcript.

    Attributes:
        gene_name: HGNC gene symbol
        ensembl_gene_id: Ensembl gene ID (ENSG...)
        ensembl_transcript_id: Ensembl transcript ID (ENST...)
        strand: "+" or "-"
        biotype: Transcript biotype (e.g. protein_coding)
        so_accessions: Sequence Ontology term accessions (e.g. 1583 for SO:0001583)
        sift: SIFT score - None if not predicted
        polyphen: PolyPhen score - None if not predicted
    """

    gene_name: str | None = None
    ensembl_gene_id: str | None = None
    ensembl_transcript_id: str | None = None
    strand: str | None = None
    biotype: str | None = None
    so_accessions: set[int] = Field(default_factory=set)
    sift: Score | None = None
    polyphen: Score | None = None


class AnnotationDocument(BaseModel):
    """Full VEP annotation of one variant for one VEP/cache version pair."""

    chromosome: str
    start: int = Field(..., ge=0)
    end: int = Field(..., ge=0)
    reference: str = ""
    alternate: str = ""
    vep_version: str
    vep_cache_version: str
    consequence_types: list[ConsequenceType] = Field(default_factory=list)
    xrefs: list[Xref] = Field(default_factory=list)

    @property
    def variant_id(self) -> str:
        return f"{self.chromosome}_{self.start}_{self.reference}_{self.alternate}"

    @property
    def document_id(self) -> str:
        return f"{self.variant_id}_{self.vep_version}_{self.vep_cache_version}"
