"""
Estimate history visualization.

Plots of filtered states with their uncertainty bands and of the NIS
consistency test.
"""

import numpy as np
import matplotlib.pyplot as plt

from ..metrics.performance import chi2_bounds, nis


def plot_state_history(history, time=None, ground_truth=None, state_names=None,
                       n_std=3.0, title="State Estimates", figsize=(12, 8),
                       save_path=None, show=True):
    """
    Plot every state variable over time with an n-sigma band.

    Parameters
    ----------
    history : EstimateHistory
        Output of run_filter
    time : np.ndarray, optional
        Time vector (N,). Defaults to the tick index.
    ground_truth : np.ndarray, optional
        True states (N, dim_x)
    state_names : list of str, optional
        Names for each state dimension
    n_std : float, optional
        Half-width of the band in standard deviations (default: 3-sigma)
    title : str, optional
        Main title for figure
    figsize : tuple, optional
        Figure size
    save_path : str, optional
        Path to save figure
    show : bool, optional
        Whether to display the plot

    Returns
    -------
    fig, axes
        Matplotlib figure and axes array
    """
    means = np.asarray(history.means)
    n_ticks, dim_x = means.shape

    if time is None:
        time = np.arange(n_ticks)
    if state_names is None:
        state_names = [f'State {i+1}' for i in range(dim_x)]

    sigma = np.sqrt(np.clip(np.diagonal(history.covariances, axis1=1, axis2=2), 0.0, None))

    n_rows = (dim_x + 1) // 2
    fig, axes = plt.subplots(n_rows, 2, figsize=figsize, squeeze=False)
    axes = axes.flatten()

    for i in range(dim_x):
        ax = axes[i]

        ax.plot(time, means[:, i], 'b-', linewidth=2, label='Estimate', alpha=0.8)
        ax.fill_between(time,
                        means[:, i] - n_std * sigma[:, i],
                        means[:, i] + n_std * sigma[:, i],
                        color='blue', alpha=0.15, label=f'±{n_std:g}σ')

        if ground_truth is not None:
            ax.plot(time, ground_truth[:, i], 'k--', linewidth=1.5,
                    label='Ground Truth', alpha=0.6)

        ax.set_xlabel('Time (s)', fontsize=10)
        ax.set_ylabel(state_names[i], fontsize=10)
        ax.grid(True, alpha=0.3)
        ax.legend(fontsize=8)

    # Remove extra subplot if dim_x is odd
    if dim_x % 2 == 1:
        fig.delaxes(axes[-1])

    fig.suptitle(title, fontsize=14)
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')

    if show:
        plt.show()

    return fig, axes


def plot_nis(history, time=None, confidence=0.95, title="NIS Consistency Test",
             figsize=(12, 6), save_path=None, show=True):
    """
    Plot the NIS of every fused reading against its chi-squared band.

    Ticks whose correction was skipped have no NIS. They leave a gap in the
    curve and are marked with a cross on the time axis. The title reports
    the share of fused readings whose NIS falls inside the band.

    Parameters
    ----------
    history : EstimateHistory
        Output of run_filter
    time : np.ndarray, optional
        Time vector (N,). Defaults to the tick index.
    confidence : float, optional
        Confidence level of the band
    title : str, optional
        Plot title
    figsize : tuple, optional
        Figure size
    save_path : str, optional
        Path to save figure
    show : bool, optional
        Whether to display the plot

    Returns
    -------
    fig, ax
        Matplotlib figure and axes
    """
    values = nis(history.innovations, history.innovation_covariances)
    dim_z = history.innovations.shape[1]
    accepted = np.asarray(history.accepted, dtype=bool)
    time = np.arange(len(values)) if time is None else np.asarray(time)

    lower, upper = chi2_bounds(dim_z, confidence)

    fig, ax = plt.subplots(figsize=figsize)

    ax.axhspan(lower, upper, color='red', alpha=0.1,
               label=f'{confidence*100:.0f}% band (dof={dim_z})')
    ax.axhline(dim_z, color='k', linestyle='--', linewidth=1.5, label='Mean')
    ax.plot(time, values, 'b.-', linewidth=1.0, label='NIS')

    n_skipped = int(np.count_nonzero(~accepted))
    if n_skipped:
        ax.plot(time[~accepted], np.zeros(n_skipped), 'rx', markersize=8,
                clip_on=False, label=f'Skipped ({n_skipped})')

    fused = values[accepted]
    if fused.size:
        inside = np.mean((fused >= lower) & (fused <= upper))
        title = f'{title}: {inside:.0%} inside'

    ax.set_xlabel('Time (s)', fontsize=12)
    ax.set_ylabel('NIS', fontsize=12)
    ax.set_ylim(bottom=0.0)
    ax.set_title(title, fontsize=14)
    ax.legend(fontsize=10)
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')

    if show:
        plt.show()

    return fig, ax
