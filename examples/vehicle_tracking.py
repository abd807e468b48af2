"""
Vehicle Tracking Example

Tracks a vehicle in the plane with a constant-acceleration model and a
position-only sensor. Runs the recorded track of kalmanfilter.net numerical
example 9, then a synthetic track with ground truth to report metrics.
"""

import numpy as np
import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from linear_estimation import Estimate, predict, run_filter
from linear_estimation.metrics import history_metrics, print_metrics
from linear_estimation.models import constant_acceleration_model
from linear_estimation.visualization import plot_state_history

from trajectory_generators import generate_constant_acceleration_track, load_vehicle_track

# ============================================================================
# CONFIGURATION
# ============================================================================
SENSOR_STD = 3.0        # m
ACCEL_CHANGE_STD = 0.2  # m/s² per tick
INITIAL_VARIANCE = 500.0
STATE_NAMES = ['x (m)', 'vx (m/s)', 'ax (m/s²)', 'y (m)', 'vy (m/s)', 'ay (m/s²)']
RESULTS_PATH = os.path.join(os.path.dirname(__file__), 'results')
SHOW_PLOTS = False
# ============================================================================


def run_recorded_track():
    """Filter the recorded track and forecast one tick ahead."""
    data = load_vehicle_track()

    model = constant_acceleration_model(data['dt'], SENSOR_STD**2, ACCEL_CHANGE_STD**2, axes=2)
    prior = Estimate.prior(np.zeros(model.dim_x), INITIAL_VARIANCE)

    history = run_filter(model, prior, None, data['measurements'])
    forecast = predict(model, history.final)

    print("Recorded track, forecast for the next tick:")
    for name, value in zip(STATE_NAMES, forecast.mean):
        print(f"  {name:10s} {value:9.2f}")

    return history


def run_synthetic_track():
    """Filter a simulated track and compare with ground truth."""
    data = generate_constant_acceleration_track(N=300, dt=0.1, accel_std=0.5, sensor_std=2.0)

    model = constant_acceleration_model(data['dt'], 2.0**2, 0.5**2, axes=2)
    prior = Estimate.prior(np.zeros(model.dim_x), INITIAL_VARIANCE)

    history = run_filter(model, prior, None, data['measurements'], on_singular='skip')
    metrics = history_metrics(history, data['ground_truth'])
    print_metrics(metrics, filter_name="Kalman Filter (synthetic track)")

    os.makedirs(RESULTS_PATH, exist_ok=True)
    plot_state_history(history, time=data['time'], ground_truth=data['ground_truth'],
                       state_names=STATE_NAMES, title="Synthetic vehicle track",
                       save_path=os.path.join(RESULTS_PATH, 'vehicle_states.png'),
                       show=SHOW_PLOTS)

    return history


if __name__ == "__main__":
    print("\n" + "="*60)
    print("Vehicle Tracking")
    print("="*60 + "\n")

    run_recorded_track()
    run_synthetic_track()
