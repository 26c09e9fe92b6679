#!/usr/bin/env python3
# railcmd/helpers/distance.py
from __future__ import annotations

"""
Levenshtein edit distance used for "did you mean" suggestions.

Works on code points (Python str), unit cost for insertion, deletion and
substitution. Keeps a single row of the DP matrix.
"""


def levenshtein_distance(source: str, target: str) -> int:
    """Return the number of single-character edits turning `source` into `target`."""
    n = len(source)
    m = len(target)

    if n == 0:
        return m
    if m == 0:
        return n

    row = list(range(m + 1))

    for i, source_char in enumerate(source):
        previous_diagonal = row[0]
        row[0] = i + 1
        for j, target_char in enumerate(target):
            cost = 0 if source_char == target_char else 1
            current = min(
                row[j + 1] + 1,            # deletion
                row[j] + 1,                # insertion
                previous_diagonal + cost,  # substitution
            )
            previous_diagonal = row[j + 1]
            row[j + 1] = current

    return row[m]
