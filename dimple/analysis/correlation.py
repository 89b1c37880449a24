"""
dimple.analysis.correlation

Pairwise correlation engines over a dataset with missing cells.

Both engines are written as batched matrix reductions: every cell of the
[d, d] output is an independent function of pairwise counts, sums and
cross-products, so the work runs as a handful of matmuls on any torch device.

Notation used below:
    o  : [n, d] observed indicator (1 = observed)
    m  : [n, d] missing indicator (1 = missing)
    xc : [n, d] values centred on their observed column mean, 0 where missing

1. Pearson (pairwise complete):
   For variables a, b only rows where both are observed are used.
       n[a, b]  = (o^T o)[a, b]
       s[a, b]  = (xc^T o)[a, b]        sum of a over the joint rows
       ss[a, b] = ((xc^2)^T o)[a, b]    sum of squares of a over the joint rows
       sp[a, b] = (xc^T xc)[a, b]       cross-products over the joint rows

2. Missingness correlation (biserial, ltm convention):
   Row i is the missingness of variable i, column j the values of variable
   j, over rows where j is observed. Rows where i is observed form the
   reference group:
       r[i, j] = (mean_obs - mean_miss) * sqrt(p * (1 - p)) / sd_j
   with p the share of those rows where i is observed and sd_j the sample
   standard deviation (n - 1) of j.
       n_miss[i, j]   = (m^T o)[i, j]
       sum_miss[i, j] = (m^T xc)[i, j]

A variable counts as constant only when all its observed values (on the
rows in question) are equal. Undefined cells are NaN; nothing is clamped
to zero.
"""

from typing import Tuple, Union

import numpy as np
import pandas as pd
import torch

from dimple.core.types import MissingDataset

DeviceLike = Union[str, torch.device]

# Upper bound on elements of the [rows, d, d] block used for joint min/max
_BLOCK_ELEMENTS = 2 ** 22


def _centered_observed(
    dataset: MissingDataset,
    device: DeviceLike,
) -> Tuple[torch.Tensor, torch.Tensor, torch.Tensor]:
    """Return (x, xc, observed) on device.

    x holds the raw values with 0 in missing cells, xc the values centred on
    their observed column mean (0 where missing), observed the bool mask.
    """
    x = torch.from_numpy(np.array(dataset.values, dtype=np.float64)).to(device)
    observed = ~torch.isnan(x)
    o = observed.to(torch.float64)
    x = torch.where(observed, x, torch.zeros_like(x))

    n_obs = o.sum(dim=0)
    mean = x.sum(dim=0) / n_obs.clamp(min=1)
    xc = (x - mean) * o
    return x, xc, observed


def _constant_columns(x: torch.Tensor, observed: torch.Tensor) -> torch.Tensor:
    """[d] True where a column has at most one distinct observed value."""
    hi = torch.where(observed, x, x.new_tensor(float("-inf"))).amax(dim=0)
    lo = torch.where(observed, x, x.new_tensor(float("inf"))).amin(dim=0)
    return hi <= lo


def _constant_on_joint_rows(x: torch.Tensor, observed: torch.Tensor) -> torch.Tensor:
    """[d, d] entry [a, b] is True when a has at most one distinct value on
    the rows where both a and b are observed.

    Running max/min over row blocks keeps memory at O(block * d^2).
    """
    n, d = x.shape
    hi = torch.full((d, d), float("-inf"), dtype=x.dtype, device=x.device)
    lo = torch.full((d, d), float("inf"), dtype=x.dtype, device=x.device)
    neg_inf = x.new_tensor(float("-inf"))
    pos_inf = x.new_tensor(float("inf"))

    step = max(1, _BLOCK_ELEMENTS // max(d * d, 1))
    for start in range(0, n, step):
        obs = observed[start:start + step]
        joint = obs.unsqueeze(2) & obs.unsqueeze(1)               # [r, a, b]
        vals = x[start:start + step].unsqueeze(2).expand_as(joint)
        hi = torch.maximum(hi, torch.where(joint, vals, neg_inf).amax(dim=0))
        lo = torch.minimum(lo, torch.where(joint, vals, pos_inf).amin(dim=0))
    return hi <= lo


def _to_frame(r: torch.Tensor, index, columns) -> pd.DataFrame:
    return pd.DataFrame(r.cpu().numpy(), index=list(index), columns=list(columns))


def pearson_correlation(
    dataset: MissingDataset,
    device: DeviceLike = "cpu",
) -> pd.DataFrame:
    """Pearson correlation matrix using pairwise-complete observations.

    A cell is NaN when the pair shares fewer than 2 observed rows or either
    variable is constant on those rows. The diagonal is 1 wherever the
    variable itself has a defined variance.

    Returns:
        [d, d] symmetric DataFrame labelled by feature name.
    """
    x, xc, observed = _centered_observed(dataset, device)
    o = observed.to(torch.float64)
    d = xc.shape[1]

    n = o.T @ o
    s = xc.T @ o
    ss = (xc * xc).T @ o
    sp = xc.T @ xc

    n_safe = n.clamp(min=1)
    cov = sp - s * s.T / n_safe
    var_a = ss - s * s / n_safe
    var_b = var_a.T

    constant = _constant_on_joint_rows(x, observed)
    defined = (n >= 2) & ~constant & ~constant.T & (var_a > 0) & (var_b > 0)

    denom = torch.sqrt(var_a.clamp(min=0) * var_b.clamp(min=0))
    denom = torch.where(defined, denom, torch.ones_like(denom))
    nan = torch.full_like(cov, float("nan"))
    r = torch.where(defined, cov / denom, nan).clamp(-1.0, 1.0)

    # Exact symmetry
    r = (r + r.T) / 2

    idx = torch.arange(d, device=r.device)
    r[idx, idx] = torch.where(
        defined[idx, idx],
        torch.ones(d, dtype=r.dtype, device=r.device),
        torch.full((d,), float("nan"), dtype=r.dtype, device=r.device),
    )

    names = dataset.feature_names
    return _to_frame(r, names, names)


def na_correlation(
    dataset: MissingDataset,
    device: DeviceLike = "cpu",
) -> pd.DataFrame:
    """Biserial correlation of missingness indicators with observed values.

    Entry [i, j] relates the missingness of variable i to the values of
    variable j, over rows where j is observed, following
    ``ltm::biserial.cor(x_j, is.na(x_i), use="complete.obs")``: the mean
    difference (i observed minus i missing) scaled by sqrt(p(1-p)) and
    divided by the sample standard deviation of j. Negative values mean
    rows missing i tend to have larger j.

    A cell is NaN when j has fewer than 2 observed values, j is constant, or
    i is always (or never) missing on those rows. The diagonal is always NaN
    and a fully observed variable yields an all-NaN row.

    Returns:
        [d, d] DataFrame; rows "<name>_is_na", columns "<name>".
    """
    x, xc, observed = _centered_observed(dataset, device)
    o = observed.to(torch.float64)
    m = 1.0 - o

    n_j = o.sum(dim=0)
    n_miss = m.T @ o
    n_obs = n_j - n_miss
    sum_miss = m.T @ xc
    sum_j = xc.sum(dim=0)
    sum_obs = sum_j - sum_miss
    sumsq_j = (xc * xc).sum(dim=0)

    var_x = sumsq_j - sum_j ** 2 / n_j.clamp(min=1)
    sd_x = torch.sqrt(var_x.clamp(min=0) / (n_j - 1).clamp(min=1))

    flat_x = _constant_columns(x, observed) | ~(var_x > 0)
    defined = ((n_j >= 2) & ~flat_x).unsqueeze(0) & (n_miss > 0) & (n_obs > 0)

    diff = sum_obs / n_obs.clamp(min=1) - sum_miss / n_miss.clamp(min=1)
    p = n_obs / n_j.clamp(min=1)
    denom = torch.where(defined, sd_x.expand_as(diff), torch.ones_like(diff))
    nan = torch.full_like(diff, float("nan"))
    r = torch.where(defined, diff * torch.sqrt(p * (1 - p)) / denom, nan).clamp(-1.0, 1.0)

    names = dataset.feature_names
    return _to_frame(r, [f"{name}_is_na" for name in names], names)


def count_undefined(frame: pd.DataFrame, ignore_diagonal: bool = False) -> int:
    """Number of NaN cells, optionally excluding the diagonal."""
    undefined = np.isnan(frame.to_numpy(dtype=np.float64))
    if ignore_diagonal:
        np.fill_diagonal(undefined, False)
    return int(undefined.sum())
