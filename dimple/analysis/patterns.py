"""
dimple.analysis.patterns

Row-wise missingness pattern mining and the retention-threshold table.

A pattern is the boolean missingness vector of a row. Rows are grouped by
exact pattern equality and each distinct pattern keeps its occurrence count.
The threshold table then answers: if only patterns occurring more than t
times are simulated, what percentage of the incomplete rows is still
represented?
"""

from typing import Sequence

import numpy as np

from dimple.core.types import MissingDataset, PatternTable, ThresholdTable
from dimple.config.schema import DEFAULT_PDM_THRESHOLDS


def mine_patterns(dataset: MissingDataset) -> PatternTable:
    """Group rows by missingness pattern.
    
    Patterns are ordered by number of missing variables, then by occurrence
    count, both ascending. Remaining ties keep the lexicographic order of
    the patterns so the table is deterministic.
    
    Returns:
        PatternTable whose counts sum to the number of rows.
    """
    mask = dataset.missing_mask
    
    patterns, counts = np.unique(mask, axis=0, return_counts=True)
    n_missing = patterns.sum(axis=1)
    
    # lexsort: last key is primary; stable, so ties keep unique()'s order
    order = np.lexsort((counts, n_missing))
    
    return PatternTable(
        patterns=patterns[order].astype(bool),
        counts=counts[order].astype(np.int64),
        n_missing=n_missing[order].astype(np.int64),
        margin=mask.sum(axis=0).astype(np.int64),
        feature_names=dataset.feature_names,
    )


def threshold_table(
    table: PatternTable,
    thresholds: Sequence[int] = DEFAULT_PDM_THRESHOLDS,
) -> ThresholdTable:
    """Percentage of incomplete rows covered by patterns above each cutoff.
    
    For cutoff t the retained percentage is
        round(100 * sum(count for incomplete patterns with count > t)
                   / sum(count for all incomplete patterns))
    rounded half to even. With no incomplete rows every entry is NaN.
    """
    counts = table.incomplete_counts
    total = int(counts.sum())
    
    retained = []
    for t in thresholds:
        if total == 0:
            retained.append(float("nan"))
            continue
        kept = int(counts[counts > t].sum())
        retained.append(float(np.round(100 * kept / total)))
    
    return ThresholdTable(thresholds=tuple(int(t) for t in thresholds), retained=tuple(retained))
