"""
Performance metrics for evaluating state estimation quality.

Includes RMSE, MAE, NEES, and NIS for filter evaluation. NIS needs no
ground truth, so it can also be monitored on live data.
"""

import numpy as np
from scipy.stats import chi2


def rmse(estimates, ground_truth, axis=0):
    """
    Root Mean Square Error.

    Parameters
    ----------
    estimates : np.ndarray
        Estimated states (N, dim) or (N,)
    ground_truth : np.ndarray
        True states (N, dim) or (N,)
    axis : int, optional
        Axis along which to compute RMSE

    Returns
    -------
    float or np.ndarray
        RMSE value(s)
    """
    errors = np.asarray(estimates, dtype=float) - np.asarray(ground_truth, dtype=float)
    return np.sqrt(np.mean(errors ** 2, axis=axis))


def mae(estimates, ground_truth, axis=0):
    """Mean Absolute Error, same conventions as rmse."""
    errors = np.asarray(estimates, dtype=float) - np.asarray(ground_truth, dtype=float)
    return np.mean(np.abs(errors), axis=axis)


def nees(estimates, ground_truth, covariances):
    """
    Normalized Estimation Error Squared (NEES).

    For a consistent filter NEES follows a chi-squared distribution with
    dim_x degrees of freedom.

    Parameters
    ----------
    estimates : np.ndarray
        Estimated states (N, dim_x)
    ground_truth : np.ndarray
        True states (N, dim_x)
    covariances : np.ndarray
        Estimation error covariances (N, dim_x, dim_x)

    Returns
    -------
    np.ndarray
        NEES values for each time step (N,)
    """
    errors = np.asarray(estimates, dtype=float) - np.asarray(ground_truth, dtype=float)
    covariances = np.asarray(covariances, dtype=float)
    return _normalized_squares(errors, covariances)


def nis(innovations, innovation_covariances):
    """
    Normalized Innovation Squared (NIS).

    For a consistent filter NIS follows a chi-squared distribution with
    dim_z degrees of freedom.

    Parameters
    ----------
    innovations : np.ndarray
        Innovation vectors (N, dim_z)
    innovation_covariances : np.ndarray
        Innovation covariances (N, dim_z, dim_z)

    Returns
    -------
    np.ndarray
        NIS values for each time step (N,). NaN where the innovation is NaN
        (ticks whose correction was skipped).
    """
    innovations = np.asarray(innovations, dtype=float)
    innovation_covariances = np.asarray(innovation_covariances, dtype=float)
    return _normalized_squares(innovations, innovation_covariances)


def chi2_bounds(dof, confidence=0.95, n_samples=1):
    """
    Two-sided confidence interval for NEES / NIS.

    Parameters
    ----------
    dof : int
        Degrees of freedom (dim_x for NEES, dim_z for NIS)
    confidence : float, optional
        Probability mass inside the interval
    n_samples : int, optional
        Number of values averaged. The bounds apply to the mean of that
        many independent values.

    Returns
    -------
    tuple of float
        (lower, upper)
    """
    tail = (1.0 - confidence) / 2.0
    lower = chi2.ppf(tail, dof * n_samples) / n_samples
    upper = chi2.ppf(1.0 - tail, dof * n_samples) / n_samples
    return float(lower), float(upper)


def compute_all_metrics(estimates, ground_truth, covariances=None,
                        innovations=None, innovation_covariances=None):
    """
    Compute all available metrics.

    Parameters
    ----------
    estimates : np.ndarray
        Estimated states (N, dim_x)
    ground_truth : np.ndarray
        True states (N, dim_x)
    covariances : np.ndarray, optional
        State covariances (N, dim_x, dim_x)
    innovations : np.ndarray, optional
        Innovation vectors (N, dim_z)
    innovation_covariances : np.ndarray, optional
        Innovation covariances (N, dim_z, dim_z)

    Returns
    -------
    dict
        Dictionary with computed metrics
    """
    metrics = {}

    metrics['rmse'] = rmse(estimates, ground_truth, axis=0)
    metrics['mae'] = mae(estimates, ground_truth, axis=0)
    metrics['rmse_total'] = float(np.mean(metrics['rmse']))
    metrics['mae_total'] = float(np.mean(metrics['mae']))

    if covariances is not None:
        nees_vals = nees(estimates, ground_truth, covariances)
        metrics['nees'] = nees_vals
        metrics['nees_mean'] = float(np.mean(nees_vals))
        metrics['nees_std'] = float(np.std(nees_vals))

    if innovations is not None and innovation_covariances is not None:
        nis_vals = nis(innovations, innovation_covariances)
        fused = nis_vals[~np.isnan(nis_vals)]
        metrics['nis'] = nis_vals
        metrics['nis_mean'] = float(np.mean(fused)) if len(fused) else float('nan')
        metrics['nis_std'] = float(np.std(fused)) if len(fused) else float('nan')

    return metrics


def history_metrics(history, ground_truth):
    """
    compute_all_metrics for the output of run_filter.

    Parameters
    ----------
    history : EstimateHistory
        Filter output
    ground_truth : np.ndarray
        True states (N, dim_x)

    Returns
    -------
    dict
        Dictionary with computed metrics, including the number of skipped
        corrections under 'skipped'
    """
    metrics = compute_all_metrics(history.means, ground_truth,
                                  covariances=history.covariances,
                                  innovations=history.innovations,
                                  innovation_covariances=history.innovation_covariances)
    metrics['skipped'] = int(np.count_nonzero(~history.accepted))
    return metrics


def print_metrics(metrics, filter_name="Filter"):
    """
    Print metrics in a formatted way.

    Parameters
    ----------
    metrics : dict
        Dictionary of metrics from compute_all_metrics
    filter_name : str, optional
        Name of the filter for display
    """
    print(f"\n{filter_name} Performance Metrics")
    print("=" * 50)

    if 'rmse' in metrics:
        print(f"RMSE per dimension: {metrics['rmse']}")
        print(f"Total RMSE: {metrics['rmse_total']:.6f}")

    if 'mae' in metrics:
        print(f"MAE per dimension: {metrics['mae']}")
        print(f"Total MAE: {metrics['mae_total']:.6f}")

    if 'nees_mean' in metrics:
        print(f"NEES (mean ± std): {metrics['nees_mean']:.2f} ± {metrics['nees_std']:.2f}")

    if 'nis_mean' in metrics:
        print(f"NIS (mean ± std): {metrics['nis_mean']:.2f} ± {metrics['nis_std']:.2f}")

    if metrics.get('skipped'):
        print(f"Skipped corrections: {metrics['skipped']}")

    print("=" * 50)


def _normalized_squares(errors, covariances):
    values = np.full(len(errors), np.nan)

    for i in range(len(errors)):
        e = errors[i]
        if not np.all(np.isfinite(e)):
            continue
        values[i] = e @ np.linalg.solve(covariances[i], e)

    return values
