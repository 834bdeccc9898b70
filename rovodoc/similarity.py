"""Edit distance and annotation name suggestions."""

from __future__ import annotations

ANNOTATIONS = ("tag", "security", "id", "hidden", "rovo-ignore")


def levenshtein_distance(s1: str, s2: str) -> int:
    """Return the Levenshtein distance between two strings."""
    previous = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1, start=1):
        current = [i]
        for j, c2 in enumerate(s2, start=1):
            cost = 0 if c1 == c2 else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        previous = current
    return previous[-1]


def find_closest_annotation(text: str) -> str | None:
    """Return the known annotation within two edits of ``text``, if any."""
    lowered = text.lower()
    best: str | None = None
    best_distance = None
    for annotation in ANNOTATIONS:
        distance = levenshtein_distance(lowered, annotation)
        if distance <= 2 and (best_distance is None or distance < best_distance):
            best, best_distance = annotation, distance
    return best