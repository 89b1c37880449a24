"""
Tests for dimple.analysis.correlation

Cross-checked against pandas (pairwise Pearson), scipy (point-biserial) and
a direct transcription of the ltm biserial.cor formula.
"""

import numpy as np
import pandas as pd
import pytest
from scipy import stats

from dimple.data.dataset import from_frame, from_numpy
from dimple.analysis.correlation import pearson_correlation, na_correlation, count_undefined


def _biserial_cor(x, observed_group):
    """(mean observed - mean missing) * sqrt(p(1-p)) / sd, sd with n - 1."""
    p = observed_group.mean()
    diff = x[observed_group].mean() - x[~observed_group].mean()
    return diff * np.sqrt(p * (1 - p)) / np.std(x, ddof=1)


class TestPearsonCorrelation:
    """Tests for pearson_correlation."""
    
    def test_matches_pandas_pairwise(self, random_missing_frame):
        corr = pearson_correlation(from_frame(random_missing_frame))
        expected = random_missing_frame.corr(method="pearson")
        
        np.testing.assert_allclose(corr.to_numpy(), expected.to_numpy(), atol=1e-10)
        assert list(corr.index) == list(random_missing_frame.columns)
        assert list(corr.columns) == list(random_missing_frame.columns)
    
    def test_symmetric_with_unit_diagonal(self, random_missing_frame):
        corr = pearson_correlation(from_frame(random_missing_frame)).to_numpy()
        
        np.testing.assert_array_equal(corr, corr.T)
        np.testing.assert_array_equal(np.diag(corr), np.ones(6))
    
    def test_values_bounded(self, rng):
        x = rng.normal(size=(30, 3))
        x[:, 1] = 2 * x[:, 0] + 1  # Perfectly correlated
        x[:5, 2] = np.nan
        corr = pearson_correlation(from_numpy(x)).to_numpy()
        
        assert np.all(np.abs(corr) <= 1.0)
        assert corr[0, 1] == pytest.approx(1.0)
    
    def test_uses_pairwise_rows(self):
        # Each pair only uses the rows where both of its variables are observed
        df = pd.DataFrame({
            "a": [1.0, 2.0, 3.0, 4.0, np.nan],
            "b": [2.0, 4.0, 6.0, np.nan, 1.0],
            "c": [1.0, 3.0, 2.0, 5.0, 4.0],
        })
        corr = pearson_correlation(from_frame(df))
        
        # a, b share rows 0-2 where b = 2a exactly
        assert corr.loc["a", "b"] == pytest.approx(1.0)
        assert corr.loc["a", "c"] == pytest.approx(df[["a", "c"]].dropna().corr().iloc[0, 1])
    
    def test_constant_column_undefined(self, rng):
        x = rng.normal(size=(20, 3))
        x[:, 1] = 7.3
        corr = pearson_correlation(from_numpy(x)).to_numpy()
        
        assert np.all(np.isnan(corr[1, :]))
        assert np.all(np.isnan(corr[:, 1]))
        assert corr[0, 0] == 1.0
        assert not np.isnan(corr[0, 2])
    
    def test_large_offset_column_defined(self):
        t = 1.7e9 + np.arange(6, dtype=float)
        y = np.arange(1.0, 7.0)
        a = np.array([1.0, np.nan, 2.0, np.nan, 5.0, 3.0])
        df = pd.DataFrame({"t": t, "y": y, "a": a})
        corr = pearson_correlation(from_frame(df))
        
        assert corr.loc["t", "t"] == 1.0
        assert corr.loc["t", "y"] == pytest.approx(1.0)
        np.testing.assert_allclose(corr.to_numpy(), df.corr().to_numpy(), atol=1e-9)
    
    def test_tiny_spread_column_defined(self, rng):
        x = rng.normal(size=(25, 2))
        x[:, 1] = 1e-12 * x[:, 0] + 3.0e-3
        corr = pearson_correlation(from_numpy(x)).to_numpy()
        assert not np.any(np.isnan(corr))
    
    def test_constant_on_joint_rows_only(self):
        # b varies overall but is constant where a is observed
        df = pd.DataFrame({
            "a": [1.0, 2.0, 3.0, np.nan, np.nan],
            "b": [4.0, 4.0, 4.0, 8.0, 9.0],
        })
        corr = pearson_correlation(from_frame(df))
        assert np.isnan(corr.loc["a", "b"])
        assert corr.loc["b", "b"] == 1.0
    
    def test_too_few_joint_rows_undefined(self):
        x = np.array([
            [1.0, np.nan],
            [2.0, np.nan],
            [3.0, 5.0],
            [np.nan, 6.0],
            [np.nan, 7.0],
        ])
        corr = pearson_correlation(from_numpy(x)).to_numpy()
        
        assert np.isnan(corr[0, 1])
        assert np.isnan(corr[1, 0])
        assert corr[0, 0] == 1.0
        assert corr[1, 1] == 1.0
    
    def test_fully_missing_column_undefined(self, rng):
        x = rng.normal(size=(10, 2))
        x[:, 1] = np.nan
        corr = pearson_correlation(from_numpy(x)).to_numpy()
        
        assert corr[0, 0] == 1.0
        assert np.isnan(corr[1, 1])
        assert np.isnan(corr[0, 1])


class TestNaCorrelation:
    """Tests for na_correlation."""
    
    def test_hand_computed_value(self):
        df = pd.DataFrame({
            "a": [5.0, 6.0, np.nan, np.nan],
            "c": [1.0, 2.0, 3.0, 4.0],
        })
        na = na_correlation(from_frame(df))
        
        # Observed group mean 1.5, missing group mean 3.5, p = 0.5, sd = sqrt(5/3)
        assert na.loc["a_is_na", "c"] == pytest.approx(-np.sqrt(3 / 5))
    
    def test_labels(self, shared_mask_frame):
        na = na_correlation(from_frame(shared_mask_frame))
        
        assert list(na.index) == ["A_is_na", "B_is_na", "C_is_na"]
        assert list(na.columns) == ["A", "B", "C"]
    
    def test_matches_biserial_formula(self, random_missing_frame):
        na = na_correlation(from_frame(random_missing_frame)).to_numpy()
        x = random_missing_frame.to_numpy()
        
        for i in range(x.shape[1]):
            for j in range(x.shape[1]):
                if i == j:
                    continue
                rows = ~np.isnan(x[:, j])
                expected = _biserial_cor(x[rows, j], ~np.isnan(x[rows, i]))
                assert na[i, j] == pytest.approx(expected, abs=1e-10)
    
    def test_relation_to_pointbiserial(self, random_missing_frame):
        na = na_correlation(from_frame(random_missing_frame)).to_numpy()
        x = random_missing_frame.to_numpy()
        
        rows = ~np.isnan(x[:, 1])
        n = rows.sum()
        indicator = np.isnan(x[rows, 0]).astype(float)
        r = stats.pointbiserialr(indicator, x[rows, 1])[0]
        assert na[0, 1] == pytest.approx(-r * np.sqrt((n - 1) / n), abs=1e-10)
    
    def test_large_offset_column_defined(self):
        y = np.arange(1.0, 7.0)
        df = pd.DataFrame({
            "a": [1.0, np.nan, 2.0, np.nan, 5.0, 3.0],
            "t": 1.7e9 + y,
            "y": y,
        })
        na = na_correlation(from_frame(df))
        
        # t is y shifted by a constant, so the coefficients agree
        assert not np.isnan(na.loc["a_is_na", "t"])
        assert na.loc["a_is_na", "t"] == pytest.approx(na.loc["a_is_na", "y"], abs=1e-9)

    def test_diagonal_undefined(self, random_missing_frame):
        na = na_correlation(from_frame(random_missing_frame)).to_numpy()
        assert np.all(np.isnan(np.diag(na)))
    
    def test_complete_variable_row_undefined(self, shared_mask_frame):
        na = na_correlation(from_frame(shared_mask_frame))
        
        assert na.loc["C_is_na"].isna().all()
        # B is never observed while A is missing
        assert np.isnan(na.loc["A_is_na", "B"])
        assert not np.isnan(na.loc["A_is_na", "C"])
    
    def test_bounded_or_undefined(self, random_missing_frame):
        na = na_correlation(from_frame(random_missing_frame)).to_numpy()
        defined = na[~np.isnan(na)]
        assert np.all((defined >= -1.0) & (defined <= 1.0))
    
    def test_constant_value_column_undefined(self):
        df = pd.DataFrame({
            "a": [1.0, np.nan, 3.0, np.nan],
            "k": [2.0, 2.0, 2.0, 2.0],
        })
        na = na_correlation(from_frame(df))
        assert np.isnan(na.loc["a_is_na", "k"])
    
    def test_missing_when_large_is_negative(self):
        # a goes missing exactly when c is large
        c = np.arange(10, dtype=float)
        a = np.where(c >= 5, np.nan, 1.0 + c)
        na = na_correlation(from_numpy(np.column_stack([a, c]), feature_names=["a", "c"]))
        assert na.loc["a_is_na", "c"] < -0.8


class TestCountUndefined:
    
    def test_counts(self):
        frame = pd.DataFrame([[np.nan, 1.0], [np.nan, np.nan]])
        assert count_undefined(frame) == 3
        assert count_undefined(frame, ignore_diagonal=True) == 1
