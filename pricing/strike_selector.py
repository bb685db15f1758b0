"""
Strike selection and put-call parity
=====================================
Reads a single price off a Carr-Madan grid and converts it into a put.

The grid value at the nearest log-strike is used as-is. No interpolation is
done, so the price is exact only when ln(K) falls on a grid point; otherwise
the log-strike error is at most λ/2.

Put-call parity (European, continuous yield q):
    C - P = S·exp(-qT) - K·exp(-rT)
"""

import numpy as np


def nearest_index(log_strikes: np.ndarray, target_k: float) -> int:
    """
    Index of the grid log-strike closest to target_k.

    Ties resolve to the first (lowest) index.
    """
    log_strikes = np.asarray(log_strikes, dtype=float)
    if log_strikes.size == 0:
        raise ValueError("empty log-strike grid")
    # argmin returns the first occurrence of the minimum
    return int(np.argmin(np.abs(log_strikes - target_k)))


def call_at_strike(grid, strike: float) -> tuple:
    """
    Call price at the grid point nearest to ln(strike).

    Parameters
    ----------
    grid   : PriceGrid – Output of the Carr-Madan pricer
    strike : float – Requested strike, must be positive

    Returns
    -------
    (index, call) : tuple of (int, float)
    """
    if not strike > 0:
        raise ValueError(f"strike must be positive, got {strike}")
    idx = nearest_index(grid.log_strikes, np.log(strike))
    return idx, float(grid.call_prices[idx])


def put_from_call(call: float, s0: float, r: float, q: float, t: float,
                  strike: float) -> float:
    """P = C - S·exp(-qT) + K·exp(-rT)"""
    return call - s0 * np.exp(-q * t) + strike * np.exp(-r * t)


def call_from_put(put: float, s0: float, r: float, q: float, t: float,
                  strike: float) -> float:
    """C = P + S·exp(-qT) - K·exp(-rT)"""
    return put + s0 * np.exp(-q * t) - strike * np.exp(-r * t)
