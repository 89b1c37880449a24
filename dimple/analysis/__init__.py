"""
dimple.analysis

Missingness-structure analysis.

Pipeline Overview:
    1. Basic statistics: dimensions, complete cases, missing counts/fractions
    2. Correlation engine: pairwise-complete Pearson matrix
    3. Pattern miner: distinct row-wise missingness patterns with counts
    4. Threshold table: incomplete rows retained per pattern-frequency cutoff
    5. Missingness correlation: is-missing indicator vs observed values
    6. Co-missingness clustering: binary distance, ward.D linkage
    7. Report: all of the above in one immutable record

Components 1-6 only read the validated dataset; 4 reads the output of 3.
"""

from dimple.analysis.summary import (
    BasicStatistics,
    compute_basic_statistics,
    variables_above_cutoff,
)

from dimple.analysis.correlation import (
    pearson_correlation,
    na_correlation,
    count_undefined,
)

from dimple.analysis.patterns import (
    mine_patterns,
    threshold_table,
)

from dimple.analysis.clustering import (
    binary_distances,
    ward_d_linkage,
    cluster_comissingness,
)

from dimple.analysis.views import (
    standardize,
    missingness_row_order,
    build_matrix_view,
    melt_matrix,
)

from dimple.analysis.logging import create_logger

from dimple.analysis.report import (
    MissingnessReport,
    profile_dataset,
)

__all__ = [
    # Summary
    "BasicStatistics",
    "compute_basic_statistics",
    "variables_above_cutoff",
    # Correlation
    "pearson_correlation",
    "na_correlation",
    "count_undefined",
    # Patterns
    "mine_patterns",
    "threshold_table",
    # Clustering
    "binary_distances",
    "ward_d_linkage",
    "cluster_comissingness",
    # Views
    "standardize",
    "missingness_row_order",
    "build_matrix_view",
    "melt_matrix",
    # Logging
    "create_logger",
    # Report
    "MissingnessReport",
    "profile_dataset",
]
