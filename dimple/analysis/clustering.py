"""
dimple.analysis.clustering

Hierarchical clustering of co-missingness.

Only variables with at least one missing value take part. Their boolean
missingness columns are compared with the binary (Jaccard) distance

    d(a, b) = #(exactly one missing) / #(at least one missing)

and merged with Ward's rule in its ward.D form: the Lance-Williams Ward
update applied directly to d,

    d(k, i+j) = ((n_k + n_i) d(k, i) + (n_k + n_j) d(k, j) - n_k d(i, j))
                / (n_k + n_i + n_j)

scipy's "ward" applies the same update to squared inputs, so running it on
sqrt(d) and squaring the resulting heights reproduces ward.D exactly.
"""

import numpy as np
from scipy.cluster.hierarchy import linkage
from scipy.spatial.distance import pdist

from dimple.core.types import MissingDataset, Dendrogram
from dimple.core.exceptions import DegenerateInputError


def binary_distances(indicators: np.ndarray) -> np.ndarray:
    """Condensed Jaccard distances between boolean columns."""
    return pdist(indicators.T.astype(bool), metric="jaccard")


def ward_d_linkage(distances: np.ndarray) -> np.ndarray:
    """ward.D linkage matrix from condensed dissimilarities."""
    Z = linkage(np.sqrt(distances), method="ward")
    Z[:, 2] = Z[:, 2] ** 2
    return Z


def cluster_comissingness(dataset: MissingDataset) -> Dendrogram:
    """Cluster variables by shared missingness.
    
    Raises:
        DegenerateInputError: If fewer than 2 variables have missing values.
    """
    mask = dataset.missing_mask
    has_missing = mask.any(axis=0)
    labels = tuple(name for name, keep in zip(dataset.feature_names, has_missing) if keep)
    
    if len(labels) < 2:
        raise DegenerateInputError(
            f"Co-missingness clustering needs at least 2 variables with missing "
            f"values, found {len(labels)}"
        )
    
    distances = binary_distances(mask[:, has_missing])
    return Dendrogram(labels=labels, linkage=ward_d_linkage(distances))
