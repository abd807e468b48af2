"""
Rocket Altitude Example

Tracks the altitude and vertical velocity of a rocket from an altimeter,
using the accelerometer as control input. Reproduces numerical example 10
of kalmanfilter.net.
"""

import numpy as np
import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from linear_estimation import Estimate, KalmanFilter, run_filter
from linear_estimation.models import accelerating_body_model
from linear_estimation.visualization import plot_nis, plot_state_history

from trajectory_generators import load_rocket_flight

# ============================================================================
# CONFIGURATION
# ============================================================================
ALTIMETER_VARIANCE = 400.0      # m²
ACCELEROMETER_VARIANCE = 0.01   # (m/s²)²
INITIAL_VARIANCE = 500.0
RESULTS_PATH = os.path.join(os.path.dirname(__file__), 'results')
SHOW_PLOTS = False
# ============================================================================


def run_rocket_example():
    """Run the rocket tracker tick by tick, then as a batch for plotting."""

    print("\n" + "="*60)
    print("Rocket Altitude Tracking")
    print("="*60 + "\n")

    data = load_rocket_flight()
    controls = data['controls']
    measurements = data['measurements']

    model = accelerating_body_model(data['dt'],
                                    sensor_variance=ALTIMETER_VARIANCE,
                                    process_variance=ACCELEROMETER_VARIANCE)
    prior = Estimate.prior(np.zeros(2), INITIAL_VARIANCE)

    # The acceleration measured at tick k drives the motion up to tick k+1,
    # so each step applies the previous tick's reading.
    kf = KalmanFilter(model, prior)
    previous = None
    for k in range(len(measurements)):
        kf.step(previous, measurements[k])
        previous = controls[k]

        if (k + 1) % 10 == 0:
            print(f"  Tick {k+1:2d}: altitude {kf.x[0]:8.2f} m, "
                  f"velocity {kf.x[1]:7.2f} m/s")

    forecast = kf.predict(previous)
    print(f"\nForecast for the next tick: altitude {forecast.mean[0]:.1f} m, "
          f"velocity {forecast.mean[1]:.1f} m/s")
    print("  (kalmanfilter.net reports 851.9 m and 223.2 m/s)")

    lagged = np.vstack([np.zeros((1, 1)), controls[:-1]])
    history = run_filter(model, prior, lagged, measurements)

    os.makedirs(RESULTS_PATH, exist_ok=True)
    plot_state_history(history, time=np.arange(len(history)) * data['dt'],
                       state_names=['Altitude (m)', 'Velocity (m/s)'],
                       title="Rocket: altitude and velocity",
                       save_path=os.path.join(RESULTS_PATH, 'rocket_states.png'),
                       show=SHOW_PLOTS)
    plot_nis(history, time=np.arange(len(history)) * data['dt'],
             save_path=os.path.join(RESULTS_PATH, 'rocket_nis.png'),
             show=SHOW_PLOTS)
    print(f"\nPlots saved in {RESULTS_PATH}")


if __name__ == "__main__":
    run_rocket_example()
