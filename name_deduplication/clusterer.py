"""
Near-duplicate clustering over normalised company names.

The problem:
  A customer list of a few thousand names contains "Acme Inc", "ACME",
  "Acme Ltd." and "Ácme" as separate rows.  After normalisation they are
  identical or one edit apart; the clusterer groups them.

Two strategies:
  Greedy (default):  A single forward scan per unplaced name.  The scan
                     stops at the first candidate that is too far away in
                     length OR in edit distance.  Cheap, but order-dependent:
                     a match sitting after the first miss is never found.
  Complete (opt-in): Every pair within the length gap is compared and the
                     matches are merged with a union-find.  Order-independent,
                     always O(n²) comparisons.

Both strategies share the same contract:
  - input is the raw list (duplicates allowed) plus a raw → normalised map
  - placement is tracked per list position, not per string value
  - groups have at least two members; singletons are dropped
  - every position lands in at most one group

Levenshtein distance comes from rapidfuzz.  score_cutoff lets it bail out
as soon as the threshold is exceeded; the returned value is then
threshold + 1, which is all the comparison needs.
"""

import logging
from typing import Mapping, Optional, Sequence

from rapidfuzz.distance import Levenshtein

from .normalizer import normalize
from .settings import DEFAULT_MAX_LENGTH_GAP, DEFAULT_THRESHOLD, DedupSettings

logger = logging.getLogger(__name__)

Group = list[str]


class MissingNormalizationError(ValueError):
    """A raw name has no entry in the raw → normalised map."""

    def __init__(self, name: str, position: int) -> None:
        super().__init__(
            f"No normalised form for {name!r} at position {position}; "
            "build the map with build_normalized_map() before clustering."
        )
        self.name = name
        self.position = position


# --------------------------------------------------------------------------- #
# Phase 1: build the lookup table                                             #
# --------------------------------------------------------------------------- #


def build_normalized_map(names: Sequence[str], normalizer=normalize) -> dict[str, str]:
    """
    Normalise each distinct raw name once.

    Repeated raw strings share one entry; the value would be identical anyway.
    """
    normalized: dict[str, str] = {}
    for name in names:
        if name not in normalized:
            normalized[name] = normalizer(name)

    logger.info(
        "Normalised %d names (%d distinct)", len(names), len(normalized)
    )
    return normalized


# --------------------------------------------------------------------------- #
# Phase 2: cluster                                                            #
# --------------------------------------------------------------------------- #


def _lookup(names: Sequence[str], normalized: Mapping[str, str]) -> list[str]:
    """Resolve every position up front so a bad map fails before any work."""
    resolved: list[str] = []
    for position, name in enumerate(names):
        try:
            resolved.append(normalized[name])
        except KeyError:
            raise MissingNormalizationError(name, position) from None
    return resolved


def _within(a: str, b: str, threshold: int) -> bool:
    return Levenshtein.distance(a, b, score_cutoff=threshold) <= threshold


def cluster(
    names: Sequence[str],
    normalized: Mapping[str, str],
    *,
    threshold: int = DEFAULT_THRESHOLD,
    max_length_gap: int = DEFAULT_MAX_LENGTH_GAP,
) -> list[Group]:
    """
    Greedy single-pass grouping.

    For each unplaced position i, scan j = i+1 … end:
      - skip positions already placed
      - length gap > max_length_gap → stop scanning (break, not continue)
      - distance ≤ threshold        → join the group, keep scanning
      - otherwise                   → stop scanning

    Returns groups in the order they were started.

    Raises:
        MissingNormalizationError: a raw name has no map entry.
    """
    forms = _lookup(names, normalized)
    placed = [False] * len(names)
    groups: list[Group] = []

    for i, form_i in enumerate(forms):
        if placed[i]:
            continue

        group = [names[i]]
        placed[i] = True

        for j in range(i + 1, len(names)):
            if placed[j]:
                continue

            form_j = forms[j]

            if abs(len(form_i) - len(form_j)) > max_length_gap:
                logger.debug(
                    "Length gap %r vs %r exceeds %d, scan stopped",
                    form_i, form_j, max_length_gap,
                )
                break

            if not _within(form_i, form_j, threshold):
                break

            group.append(names[j])
            placed[j] = True

        if len(group) > 1:
            logger.debug("Group %d: %r", len(groups) + 1, group)
            groups.append(group)

    logger.info(
        "Greedy clustering: %d names → %d duplicate groups", len(names), len(groups)
    )
    return groups


def cluster_components(
    names: Sequence[str],
    normalized: Mapping[str, str],
    *,
    threshold: int = DEFAULT_THRESHOLD,
    max_length_gap: int = DEFAULT_MAX_LENGTH_GAP,
) -> list[Group]:
    """
    Connected components of the "within threshold" graph.

    Unlike cluster(), a miss or a large length gap only skips that pair.
    Members keep input order; groups are ordered by their first member.

    Raises:
        MissingNormalizationError: a raw name has no map entry.
    """
    forms = _lookup(names, normalized)
    parent = list(range(len(names)))

    def find(x: int) -> int:
        while parent[x] != x:
            parent[x] = parent[parent[x]]  # path halving
            x = parent[x]
        return x

    for i, form_i in enumerate(forms):
        for j in range(i + 1, len(forms)):
            form_j = forms[j]
            if abs(len(form_i) - len(form_j)) > max_length_gap:
                continue
            if _within(form_i, form_j, threshold):
                root_i, root_j = find(i), find(j)
                if root_i != root_j:
                    # Keep the smaller index as root so group order is stable
                    parent[max(root_i, root_j)] = min(root_i, root_j)

    members: dict[int, Group] = {}
    for position, name in enumerate(names):
        members.setdefault(find(position), []).append(name)

    groups = [group for group in members.values() if len(group) > 1]

    logger.info(
        "Complete clustering: %d names → %d duplicate groups", len(names), len(groups)
    )
    return groups


class NameClusterer:
    """
    Runs the strategy selected by a DedupSettings.

    Parameter validation lives in DedupSettings; this class only dispatches.

    Usage:
        clusterer = NameClusterer(DedupSettings(threshold=1))
        groups = clusterer.cluster(names, build_normalized_map(names))
    """

    def __init__(self, settings: Optional[DedupSettings] = None) -> None:
        self.settings = settings or DedupSettings()

    def cluster(self, names: Sequence[str], normalized: Mapping[str, str]) -> list[Group]:
        strategy = cluster_components if self.settings.complete else cluster
        return strategy(
            names,
            normalized,
            threshold=self.settings.threshold,
            max_length_gap=self.settings.max_length_gap,
        )
