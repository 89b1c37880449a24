"""
dimple.analysis.report

Report assembly: run every profiling component over one dataset and bundle
the artifacts into a single immutable record.

Failure policy:
    - SchemaError / ValidationError from input construction abort the run
      before any computation.
    - Undefined statistics stay NaN in their own cell; an UndefinedStatistic
      warning names the affected artifact.
    - DegenerateInputError from clustering is recorded on the report
      (dendrogram=None, dendrogram_error=<message>); the rest of the report
      is unaffected.
"""

import time
import warnings
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Optional, Tuple, Union

import numpy as np
import pandas as pd

from dimple.core.types import (
    MissingDataset,
    PatternTable,
    ThresholdTable,
    Dendrogram,
    MatrixView,
)
from dimple.core.exceptions import (
    DegenerateInputError,
    UndefinedStatistic,
    HighMissingnessWarning,
)
from dimple.config.schema import DimpleConfig, PlotConfig
from dimple.config.hashing import hash_config
from dimple.data.dataset import as_dataset
from dimple.analysis.summary import compute_basic_statistics, variables_above_cutoff
from dimple.analysis.correlation import pearson_correlation, na_correlation, count_undefined
from dimple.analysis.patterns import mine_patterns, threshold_table
from dimple.analysis.clustering import cluster_comissingness
from dimple.analysis.views import build_matrix_view, melt_matrix
from dimple.analysis.logging import create_logger


@dataclass(frozen=True)
class MissingnessReport:
    """Every artifact derived from one dataset.
    
    Attributes:
        complete_cases: Rows with no missing cell.
        rows: Number of rows.
        columns: Number of variables.
        corr_matrix: [d, d] pairwise-complete Pearson correlations.
        fraction_missingness: Missing cells / (rows * columns).
        fraction_missingness_per_variable: Missing fraction per variable.
        total_na: Number of missing cells.
        na_per_variable: Missing cells per variable.
        md_pattern: Distinct missingness patterns with counts and margins.
        na_correlations: [d, d] missingness-indicator vs value correlations.
        min_pdm_thresholds: Retained percentage per pattern-frequency cutoff.
        vars_above_half: Variables at or above the high-missingness cutoff.
        matrix_view: Matrix-plot sink input.
        na_correlation_long: Heatmap sink input (long form of na_correlations).
        dendrogram: Co-missingness tree, None when clustering is undefined.
        dendrogram_error: Why the dendrogram is None.
        plot_config: Styling for rendering collaborators.
        config_hash: Hash of the configuration fields that affect numbers.
    
    The pandas attributes are the report's own objects and are shared with
    every reader; to_dict() hands out independent copies for callers that
    edit what they receive.
    """
    complete_cases: int
    rows: int
    columns: int
    corr_matrix: pd.DataFrame
    fraction_missingness: float
    fraction_missingness_per_variable: pd.Series
    total_na: int
    na_per_variable: pd.Series
    md_pattern: PatternTable
    na_correlations: pd.DataFrame
    min_pdm_thresholds: ThresholdTable
    vars_above_half: Tuple[str, ...]
    matrix_view: MatrixView
    na_correlation_long: pd.DataFrame
    dendrogram: Optional[Dendrogram]
    dendrogram_error: Optional[str]
    plot_config: PlotConfig
    config_hash: str
    
    @property
    def has_dendrogram(self) -> bool:
        return self.dendrogram is not None
    
    def to_dict(self) -> Dict[str, Any]:
        """Artifacts under the key names used by downstream pipeline stages.
        
        Frames and series are copies, so editing them leaves the report intact.
        """
        return {
            "Complete_cases": self.complete_cases,
            "Rows": self.rows,
            "Columns": self.columns,
            "Corr_matrix": self.corr_matrix.copy(),
            "Fraction_missingness": self.fraction_missingness,
            "Fraction_missingness_per_variable": self.fraction_missingness_per_variable.copy(),
            "Total_NA": self.total_na,
            "NA_per_variable": self.na_per_variable.copy(),
            "MD_Pattern": self.md_pattern.to_frame(),
            "NA_Correlations": self.na_correlations.copy(),
            "NA_Correlation_plot": self.na_correlation_long.copy(),
            "min_PDM_thresholds": self.min_pdm_thresholds.to_frame(),
            "Vars_above_half": list(self.vars_above_half),
            "Matrix_plot": replace(self.matrix_view, values=self.matrix_view.values.copy()),
            "Cluster_plot": self.dendrogram,
        }


def _warn_undefined(
    corr: pd.DataFrame,
    na_corr: pd.DataFrame,
    thresholds: ThresholdTable,
    has_missing: np.ndarray,
) -> None:
    n_corr = count_undefined(corr)
    if n_corr:
        warnings.warn(
            f"Corr_matrix has {n_corr} undefined entries (fewer than 2 joint "
            f"observations or zero variance)",
            UndefinedStatistic,
            stacklevel=3,
        )
    
    # Rows of fully observed variables and the diagonal are always undefined
    n_na = count_undefined(na_corr.iloc[has_missing, :])
    n_na -= int(has_missing.sum())
    if n_na > 0:
        warnings.warn(
            f"NA_Correlations has {n_na} undefined off-diagonal entries for "
            f"variables with missingness",
            UndefinedStatistic,
            stacklevel=3,
        )
    
    if not thresholds.is_defined:
        warnings.warn(
            "min_PDM_thresholds is undefined: the dataset has no incomplete rows",
            UndefinedStatistic,
            stacklevel=3,
        )


def profile_dataset(
    data: Union[MissingDataset, pd.DataFrame, np.ndarray],
    config: Optional[DimpleConfig] = None,
    logger: Optional[Callable[[dict], None]] = None,
    dataset_id: str = "unnamed",
) -> MissingnessReport:
    """Derive the full missingness profile of a dataset.
    
    Args:
        data: Numeric DataFrame, 2D array, or MissingDataset. Missing = NaN.
        config: Profiling configuration. Defaults to DimpleConfig().
        logger: Callback receiving per-stage metric dicts. If None, one is
            created when config.verbose or config.log_file is set.
        dataset_id: Identifier used in logs when data is not a MissingDataset.
    
    Returns:
        MissingnessReport.
    
    Raises:
        SchemaError: If any column is not numeric.
        ValidationError: If the input is empty or malformed.
    """
    if config is None:
        config = DimpleConfig()
    if logger is None and (config.verbose or config.log_file):
        logger = create_logger(config.log_file, verbose=config.verbose)
    
    def log(metrics: dict):
        if logger is not None:
            logger(metrics)
    
    start = time.time()
    dataset = as_dataset(data, dataset_id=dataset_id)
    device = config.get_device()
    profile = config.profile
    
    log({
        "stage": "start",
        "dataset_id": dataset.dataset_id,
        "rows": dataset.n,
        "columns": dataset.d,
        "device": str(device),
    })
    
    stats = compute_basic_statistics(dataset)
    log({
        "stage": "summary",
        "total_na": stats.total_na,
        "fraction_missingness": stats.fraction_missingness,
        "complete_cases": stats.complete_cases,
    })
    
    corr = pearson_correlation(dataset, device=device)
    na_corr = na_correlation(dataset, device=device)
    
    patterns = mine_patterns(dataset)
    thresholds = threshold_table(patterns, profile.pdm_thresholds)
    log({
        "stage": "patterns",
        "n_patterns": patterns.n_patterns,
        "incomplete_rows": int(patterns.incomplete_counts.sum()),
    })
    
    try:
        dendrogram = cluster_comissingness(dataset)
        dendrogram_error = None
    except DegenerateInputError as e:
        dendrogram = None
        dendrogram_error = str(e)
    log({
        "stage": "clustering",
        "n_variables": 0 if dendrogram is None else len(dendrogram.labels),
        "error": dendrogram_error,
    })
    
    matrix_view = build_matrix_view(
        dataset,
        sort=profile.matrixplot_sort,
        transform=profile.plot_transform,
    )
    
    vars_above_half = variables_above_cutoff(
        stats.fraction_missingness_per_variable,
        profile.high_missingness_cutoff,
    )
    if vars_above_half:
        warnings.warn(
            f"Missingness reaches {profile.high_missingness_cutoff:.0%} for variable(s) "
            f"{', '.join(vars_above_half)}. The pipeline still works with highly "
            f"missing variables, but consider excluding them.",
            HighMissingnessWarning,
            stacklevel=2,
        )
    
    _warn_undefined(corr, na_corr, thresholds, stats.na_per_variable.to_numpy() > 0)
    
    report = MissingnessReport(
        complete_cases=stats.complete_cases,
        rows=stats.rows,
        columns=stats.columns,
        corr_matrix=corr,
        fraction_missingness=stats.fraction_missingness,
        fraction_missingness_per_variable=stats.fraction_missingness_per_variable,
        total_na=stats.total_na,
        na_per_variable=stats.na_per_variable,
        md_pattern=patterns,
        na_correlations=na_corr,
        min_pdm_thresholds=thresholds,
        vars_above_half=vars_above_half,
        matrix_view=matrix_view,
        na_correlation_long=melt_matrix(na_corr),
        dendrogram=dendrogram,
        dendrogram_error=dendrogram_error,
        plot_config=config.plot,
        config_hash=hash_config(config, numeric_only=True),
    )
    
    log({"stage": "done", "elapsed": time.time() - start})
    return report
