"""
Integration test: Reproducibility and determinism.

Tests:
- Same input produces bit-identical numeric artifacts
- Input dataset is not mutated
"""

import warnings

import numpy as np
import pandas as pd
import pytest

from dimple import profile_dataset, from_frame
from dimple.core.exceptions import UndefinedStatistic


@pytest.fixture(autouse=True)
def quiet_advisories():
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", UndefinedStatistic)
        yield


class TestReportDeterminism:
    
    def test_same_input_same_report(self, random_missing_frame):
        dataset = from_frame(random_missing_frame)
        r1 = profile_dataset(dataset)
        r2 = profile_dataset(dataset)
        
        np.testing.assert_array_equal(r1.corr_matrix.to_numpy(), r2.corr_matrix.to_numpy())
        np.testing.assert_array_equal(r1.na_correlations.to_numpy(), r2.na_correlations.to_numpy())
        np.testing.assert_array_equal(r1.md_pattern.patterns, r2.md_pattern.patterns)
        np.testing.assert_array_equal(r1.md_pattern.counts, r2.md_pattern.counts)
        np.testing.assert_array_equal(r1.dendrogram.linkage, r2.dendrogram.linkage)
        assert r1.min_pdm_thresholds == r2.min_pdm_thresholds
        assert r1.fraction_missingness == r2.fraction_missingness
        assert r1.config_hash == r2.config_hash
        pd.testing.assert_frame_equal(r1.matrix_view.values, r2.matrix_view.values)
    
    def test_input_not_mutated(self, random_missing_frame):
        before = random_missing_frame.copy()
        profile_dataset(random_missing_frame)
        pd.testing.assert_frame_equal(random_missing_frame, before)
