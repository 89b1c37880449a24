"""
dimple.core.types

Core data types for dimple.

All types are immutable dataclasses with validation. Arrays held by these
types are made read-only on construction.
"""

from dataclasses import dataclass
from typing import Tuple, Dict, Any

import numpy as np
import pandas as pd


def _frozen(array: np.ndarray) -> np.ndarray:
    array = np.array(array, copy=True)
    array.flags.writeable = False
    return array


@dataclass(frozen=True)
class MissingDataset:
    """A numeric dataset whose missing cells are NaN.
    
    Attributes:
        values: [n, d] float64 array. NaN = missing.
        feature_names: Column names.
        dataset_id: Identifier used in logs.
    """
    values: np.ndarray
    feature_names: Tuple[str, ...]
    dataset_id: str = "unnamed"
    
    def __post_init__(self):
        values = np.asarray(self.values, dtype=np.float64)
        if values.ndim != 2:
            raise ValueError(f"values must be 2D, got {values.ndim}D")
        if len(self.feature_names) != values.shape[1]:
            raise ValueError(
                f"{len(self.feature_names)} feature names for {values.shape[1]} columns"
            )
        object.__setattr__(self, "values", _frozen(values))
        object.__setattr__(self, "feature_names", tuple(str(f) for f in self.feature_names))
    
    @property
    def n(self) -> int:
        return self.values.shape[0]
    
    @property
    def d(self) -> int:
        return self.values.shape[1]
    
    @property
    def missing_mask(self) -> np.ndarray:
        """[n, d] bool. True = missing. Recomputed on every access."""
        return np.isnan(self.values)
    
    @property
    def observed_mask(self) -> np.ndarray:
        """[n, d] bool. True = observed."""
        return ~np.isnan(self.values)
    
    @property
    def missing_rate(self) -> float:
        return float(self.missing_mask.mean())
    
    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(np.array(self.values), columns=list(self.feature_names))


@dataclass(frozen=True)
class PatternTable:
    """Distinct row-wise missingness patterns.
    
    Attributes:
        patterns: [P, d] bool. True = variable missing in this pattern.
        counts: [P] number of rows matching each pattern exactly.
        n_missing: [P] number of missing variables per pattern.
        margin: [d] missing cell count per variable over the whole dataset.
        feature_names: Column names.
    
    Patterns are sorted by n_missing, then by count, ascending.
    """
    patterns: np.ndarray
    counts: np.ndarray
    n_missing: np.ndarray
    margin: np.ndarray
    feature_names: Tuple[str, ...]
    
    def __post_init__(self):
        P = self.patterns.shape[0]
        if self.counts.shape != (P,):
            raise ValueError(f"counts shape {self.counts.shape} != ({P},)")
        if self.n_missing.shape != (P,):
            raise ValueError(f"n_missing shape {self.n_missing.shape} != ({P},)")
        if self.margin.shape != (len(self.feature_names),):
            raise ValueError(f"margin shape {self.margin.shape} != ({len(self.feature_names)},)")
        for name in ("patterns", "counts", "n_missing", "margin"):
            object.__setattr__(self, name, _frozen(getattr(self, name)))
    
    @property
    def n_patterns(self) -> int:
        return self.patterns.shape[0]
    
    @property
    def complete_count(self) -> int:
        """Rows matching the all-observed pattern (0 if there is none)."""
        return int(self.counts[self.n_missing == 0].sum())
    
    @property
    def incomplete_counts(self) -> np.ndarray:
        """Occurrence counts of the patterns with at least one missing variable."""
        return self.counts[self.n_missing > 0]
    
    @property
    def total_missing(self) -> int:
        return int(self.margin.sum())
    
    def to_frame(self) -> pd.DataFrame:
        """Render in the md.pattern layout.
        
        Cells are 1 for observed and 0 for missing, the trailing column holds
        the number of missing variables, rows are labelled by occurrence count
        and the final row (labelled "") holds the per-variable missing counts.
        """
        body = (~self.patterns).astype(int)
        rows = np.column_stack([body, self.n_missing])
        margin_row = np.append(self.margin, self.total_missing)
        data = np.vstack([rows, margin_row]).astype(int)
        index = [str(int(c)) for c in self.counts] + [""]
        return pd.DataFrame(data, index=index, columns=list(self.feature_names) + ["n_missing"])


@dataclass(frozen=True)
class ThresholdTable:
    """Retained percentage of incomplete rows per minimum-frequency cutoff.
    
    Attributes:
        thresholds: Candidate cutoffs, in the configured order.
        retained: Percentage retained per cutoff. NaN = undefined.
    """
    thresholds: Tuple[int, ...]
    retained: Tuple[float, ...]
    
    def __post_init__(self):
        if len(self.thresholds) != len(self.retained):
            raise ValueError(
                f"{len(self.thresholds)} thresholds but {len(self.retained)} retained values"
            )
    
    @property
    def is_defined(self) -> bool:
        return not any(np.isnan(r) for r in self.retained)
    
    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "min_PDM_threshold": list(self.thresholds),
                "perc_obs_retained": list(self.retained),
            },
            index=range(1, len(self.thresholds) + 1),
        )


@dataclass(frozen=True)
class Merge:
    """One internal node of a dendrogram.
    
    left/right follow the scipy convention: ids below the number of leaves
    are leaves, larger ids refer to earlier merges.
    """
    left: int
    right: int
    height: float
    size: int


@dataclass(frozen=True)
class Dendrogram:
    """Co-missingness merge tree over variables with missing values.
    
    Attributes:
        labels: Leaf names, in the column order used for clustering.
        linkage: [k-1, 4] scipy linkage matrix; column 2 holds ward.D heights.
        method: Linkage method name.
        metric: Dissimilarity used between leaves.
    """
    labels: Tuple[str, ...]
    linkage: np.ndarray
    method: str = "ward.D"
    metric: str = "binary"
    
    def __post_init__(self):
        k = len(self.labels)
        if self.linkage.shape != (k - 1, 4):
            raise ValueError(f"linkage shape {self.linkage.shape} != ({k - 1}, 4)")
        object.__setattr__(self, "linkage", _frozen(self.linkage))
        object.__setattr__(self, "labels", tuple(self.labels))
    
    @property
    def heights(self) -> np.ndarray:
        return self.linkage[:, 2]
    
    @property
    def merges(self) -> Tuple[Merge, ...]:
        return tuple(
            Merge(left=int(a), right=int(b), height=float(h), size=int(s))
            for a, b, h, s in self.linkage
        )
    
    @property
    def leaf_order(self) -> Tuple[str, ...]:
        from scipy.cluster.hierarchy import leaves_list
        return tuple(self.labels[i] for i in leaves_list(self.linkage))
    
    def to_plot_data(self) -> Dict[str, Any]:
        """Segment coordinates and leaf labels for a dendrogram renderer."""
        from scipy.cluster.hierarchy import dendrogram
        return dendrogram(np.array(self.linkage), labels=list(self.labels), no_plot=True)


@dataclass(frozen=True)
class MatrixView:
    """Values handed to the matrix-plot sink.
    
    Attributes:
        values: [n, d] frame, possibly standardized and row-sorted.
        row_order: Original row position of each displayed row.
        sorted: Rows were sorted by missingness.
        transformed: Columns were standardized.
    """
    values: pd.DataFrame
    row_order: np.ndarray
    sorted: bool
    transformed: bool
    
    def __post_init__(self):
        if self.row_order.shape != (len(self.values),):
            raise ValueError(f"row_order shape {self.row_order.shape} != ({len(self.values)},)")
        object.__setattr__(self, "row_order", _frozen(self.row_order))
    
    def to_long(self) -> pd.DataFrame:
        """Long Observations / variable / value table, Observations from 1."""
        wide = self.values.reset_index(drop=True).copy()
        wide.insert(0, "Observations", np.arange(1, len(wide) + 1))
        return wide.melt(id_vars="Observations", var_name="variable", value_name="value")
