"""Lite, mergeable summary of a VEP variant annotation for indexing purposes.

An AnnotationSummary keeps only what range and membership queries need:
the VEP/cache version pair, the SIFT and PolyPhen score ranges, and the
sets of Sequence Ontology accessions and cross-reference ids. Summaries are
immutable; concatenation always returns a new instance.

Merge semantics:
- Score ranges keep the running (min, max); an absent range means no score of
  that class has been seen and acts as the identity.
- Sets are unioned; the empty set is the identity.
- Versions are copied from the left operand and are not checked.
"""

from dataclasses import dataclass, replace
from typing import Any, Iterable, Sequence

import structlog

from annotation_index.models import AnnotationSource

logger = structlog.get_logger()

# Field names used when the summary is mapped to a storage document
VEP_VERSION_FIELD = "vepv"
VEP_CACHE_VERSION_FIELD = "cachev"
SIFT_FIELD = "sift"
POLYPHEN_FIELD = "polyphen"
SO_ACCESSION_FIELD = "so"
XREFS_FIELD = "xrefs"

ScoreRange = tuple[float, float]


class InvalidArgumentError(ValueError):
    """Raised when a summary is constructed from an invalid field value."""

    def __init__(self, field_name: str, message: str):
        super().__init__(f"{field_name}: {message}")
        self.field_name = field_name


def extend_range(current: ScoreRange | None, value: float) -> ScoreRange:
    """Fold a single score into a (min, max) range.

    Args:
        current: Existing range, or None if no score has been seen yet
        value: New score

    Returns:
        (value, value) if current is None, otherwise the range widened to
        include value. A value already inside the range returns it unchanged.
    """
    if current is None:
        return (value, value)
    low, high = current
    if value < low:
        return (value, high)
    if value > high:
        return (low, value)
    return current


def fold_scores(current: ScoreRange | None, values: Iterable[float]) -> ScoreRange | None:
    """Fold many scores into a range, in any order."""
    for value in values:
        current = extend_range(current, value)
    return current


def merge_ranges(left: ScoreRange | None, right: ScoreRange | None) -> ScoreRange | None:
    """Combine two optional ranges; None is the identity."""
    if right is None:
        return left
    return fold_scores(left, right)


def _require_text(field_name: str, value: Any) -> None:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(field_name, f"must be a non-blank string, got {value!r}")


def _coerce_range(field_name: str, value: Sequence[float] | None) -> ScoreRange | None:
    if value is None:
        return None
    if isinstance(value, (str, bytes)):
        raise InvalidArgumentError(field_name, f"expected [min, max], got {value!r}")
    try:
        bounds = tuple(float(bound) for bound in value)
    except (TypeError, ValueError):
        raise InvalidArgumentError(field_name, f"expected [min, max] of numbers, got {value!r}") from None
    if len(bounds) != 2:
        raise InvalidArgumentError(field_name, f"expected [min, max], got {list(bounds)!r}")
    if bounds[0] > bounds[1]:
        raise InvalidArgumentError(field_name, f"min {bounds[0]} is greater than max {bounds[1]}")
    return bounds


def _members(field_name: str, values: Any) -> list[Any]:
    if isinstance(values, (str, bytes)):
        raise InvalidArgumentError(field_name, f"expected a collection, got {values!r}")
    try:
        return list(values)
    except TypeError:
        raise InvalidArgumentError(field_name, f"expected a collection, got {values!r}") from None


def _coerce_accessions(field_name: str, values: Iterable[Any]) -> frozenset[int]:
    """SO accessions are integers; integral strings such as "1583" are accepted."""
    accessions = set()
    for value in _members(field_name, values):
        if isinstance(value, bool) or isinstance(value, float) and not value.is_integer():
            raise InvalidArgumentError(field_name, f"expected integer accession, got {value!r}")
        try:
            accessions.add(int(value))
        except (TypeError, ValueError):
            raise InvalidArgumentError(field_name, f"expected integer accession, got {value!r}") from None
    return frozenset(accessions)


def _coerce_ids(field_name: str, values: Iterable[Any]) -> frozenset[str]:
    ids = set()
    for value in _members(field_name, values):
        if isinstance(value, (str, int)) and not isinstance(value, bool):
            ids.add(str(value))
        else:
            raise InvalidArgumentError(field_name, f"expected string id, got {value!r}")
    return frozenset(ids)


@dataclass(frozen=True)
class AnnotationSummary:
    """Summary of one or more VEP annotations of the same version pair.

    Attributes:
        vep_version: VEP release that produced the annotations (non-blank)
        vep_cache_version: VEP cache release used for the annotations (non-blank)
        sift_range: (min, max) of all SIFT scores seen - None if no SIFT score seen
        polyphen_range: (min, max) of all PolyPhen scores seen - None if no PolyPhen score seen
        so_accessions: Union of Sequence Ontology accessions
        xref_ids: Union of external cross-reference ids

    Raises:
        InvalidArgumentError: If a version is blank, a range is malformed,
            or a set member has the wrong type
    """

    vep_version: str
    vep_cache_version: str
    sift_range: ScoreRange | None = None
    polyphen_range: ScoreRange | None = None
    so_accessions: frozenset[int] = frozenset()
    xref_ids: frozenset[str] = frozenset()

    def __post_init__(self):
        _require_text("vep_version", self.vep_version)
        _require_text("vep_cache_version", self.vep_cache_version)
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "sift_range", _coerce_range("sift_range", self.sift_range))
        object.__setattr__(
            self, "polyphen_range", _coerce_range("polyphen_range", self.polyphen_range)
        )
        object.__setattr__(
            self, "so_accessions", _coerce_accessions("so_accessions", self.so_accessions)
        )
        object.__setattr__(self, "xref_ids", _coerce_ids("xref_ids", self.xref_ids))

    @classmethod
    def from_annotation(cls, annotation: AnnotationSource) -> "AnnotationSummary":
        """Build a summary from a single raw annotation record."""
        summary = cls(annotation.vep_version, annotation.vep_cache_version)
        return summary._fold_annotation(annotation)

    @property
    def is_empty(self) -> bool:
        return (
            self.sift_range is None
            and self.polyphen_range is None
            and not self.so_accessions
            and not self.xref_ids
        )

    @property
    def versions(self) -> tuple[str, str]:
        return (self.vep_version, self.vep_cache_version)

    def concatenate(
        self, other: "AnnotationSummary | AnnotationSource"
    ) -> "AnnotationSummary":
        """
        Concatenate this summary with another summary or a raw annotation.

        Returns a new AnnotationSummary holding the union of xref ids and SO
        accessions, and SIFT/PolyPhen ranges widened to cover both operands.
        Neither operand is modified.

        Args:
            other: AnnotationSummary or annotation record to fold in

        Returns:
            New AnnotationSummary with versions copied from self

        Notes:
            - Version pairs are not required to match; a mismatch is logged
              and the left operand's versions are kept
        """
        other_versions = (other.vep_version, other.vep_cache_version)
        if other_versions != self.versions:
            logger.warning(
                "concatenate_version_mismatch",
                kept=list(self.versions),
                dropped=list(other_versions),
            )

        if not isinstance(other, AnnotationSummary):
            return self._fold_annotation(other)

        return replace(
            self,
            sift_range=merge_ranges(self.sift_range, other.sift_range),
            polyphen_range=merge_ranges(self.polyphen_range, other.polyphen_range),
            so_accessions=self.so_accessions | other.so_accessions,
            xref_ids=self.xref_ids | other.xref_ids,
        )

    def _fold_annotation(self, annotation: AnnotationSource) -> "AnnotationSummary":
        sift_range = self.sift_range
        polyphen_range = self.polyphen_range
        so_accessions = set(self.so_accessions)
        xref_ids = set(self.xref_ids)

        for xref in annotation.xrefs or ():
            xref_ids.add(xref.id)

        for consequence_type in annotation.consequence_types or ():
            if consequence_type.sift is not None:
                sift_range = extend_range(sift_range, consequence_type.sift.score)
            if consequence_type.polyphen is not None:
                polyphen_range = extend_range(polyphen_range, consequence_type.polyphen.score)
            if consequence_type.so_accessions:
                so_accessions.update(consequence_type.so_accessions)

        return replace(
            self,
            sift_range=sift_range,
            polyphen_range=polyphen_range,
            so_accessions=so_accessions,
            xref_ids=xref_ids,
        )

    def to_document(self) -> dict[str, Any]:
        """
        Map the summary to a plain dict keyed by storage field names.

        Absent ranges are omitted, ranges become [min, max] lists and sets
        become sorted lists so the output is deterministic.
        """
        document: dict[str, Any] = {
            VEP_VERSION_FIELD: self.vep_version,
            VEP_CACHE_VERSION_FIELD: self.vep_cache_version,
        }
        if self.sift_range is not None:
            document[SIFT_FIELD] = list(self.sift_range)
        if self.polyphen_range is not None:
            document[POLYPHEN_FIELD] = list(self.polyphen_range)
        document[SO_ACCESSION_FIELD] = sorted(self.so_accessions)
        document[XREFS_FIELD] = sorted(self.xref_ids)
        return document

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "AnnotationSummary":
        """Rebuild a summary from the output of to_document()."""
        return cls(
            vep_version=document.get(VEP_VERSION_FIELD),
            vep_cache_version=document.get(VEP_CACHE_VERSION_FIELD),
            sift_range=document.get(SIFT_FIELD),
            polyphen_range=document.get(POLYPHEN_FIELD),
            so_accessions=document.get(SO_ACCESSION_FIELD) or (),
            xref_ids=document.get(XREFS_FIELD) or (),
        )
