"""
Find probable duplicate company names.

Normalise every name once, then group names whose normalised forms are
within a small Levenshtein distance of each other.
"""

from .clusterer import (
    Group,
    MissingNormalizationError,
    NameClusterer,
    build_normalized_map,
    cluster,
    cluster_components,
)
from .normalizer import NameNormalizer, normalize
from .settings import DEFAULT_LEGAL_FORMS, DedupSettings

__all__ = [
    "DEFAULT_LEGAL_FORMS",
    "DedupSettings",
    "Group",
    "MissingNormalizationError",
    "NameClusterer",
    "NameNormalizer",
    "build_normalized_map",
    "cluster",
    "cluster_components",
    "normalize",
]
