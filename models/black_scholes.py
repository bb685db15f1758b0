"""
Black-Merton-Scholes Model
==========================
The foundational model. Stock price follows Geometric Brownian Motion:
    dS = (r - q)·S·dt + σ·S·dW

Characteristic function of log-price:
    φ(u) = exp(i·u·(ln S + (r-q-σ²/2)T) - σ²T·u²/2)

This module provides:
- Characteristic function for FFT-based pricing
- Analytical call/put pricing via the closed-form formula, used as the
  reference the FFT prices converge to
"""

from dataclasses import dataclass

import numpy as np
from scipy.stats import norm
from .base_model import BaseModel, ModelParameterError


@dataclass(frozen=True)
class BlackScholesModel(BaseModel):
    """Black-Merton-Scholes option pricing model."""

    sigma: float

    name = "BS"

    def validate(self):
        if not np.isfinite(self.sigma) or self.sigma <= 0:
            raise ModelParameterError(
                f"sigma must be a positive finite number, got {self.sigma}")

    # ──────────────────────────────────────────────
    #  Characteristic Function (for FFT pricing)
    # ──────────────────────────────────────────────
    def characteristic_function(self, u, t, s0, r, q=0.0):
        """
        φ(u) = exp(i·u·(ln S + (r-q-σ²/2)·T) − σ²·T·u²/2)
        """
        x0 = np.log(s0)
        drift = (r - q - 0.5 * self.sigma**2) * t
        diffusion = -0.5 * self.sigma**2 * t * u**2

        return np.exp(1j * u * (x0 + drift) + diffusion)

    # ──────────────────────────────────────────────
    #  Analytical Pricing
    # ──────────────────────────────────────────────
    def _d1_d2(self, K, t, s0, r, q):
        d1 = (np.log(s0 / K) + (r - q + 0.5 * self.sigma**2) * t) \
             / (self.sigma * np.sqrt(t))
        d2 = d1 - self.sigma * np.sqrt(t)
        return d1, d2

    def call_price(self, K, t, s0, r, q=0.0):
        d1, d2 = self._d1_d2(K, t, s0, r, q)
        return (s0 * np.exp(-q * t) * norm.cdf(d1)
                - K * np.exp(-r * t) * norm.cdf(d2))

    def put_price(self, K, t, s0, r, q=0.0):
        d1, d2 = self._d1_d2(K, t, s0, r, q)
        return (K * np.exp(-r * t) * norm.cdf(-d2)
                - s0 * np.exp(-q * t) * norm.cdf(-d1))

    # ──────────────────────────────────────────────
    #  Parameter Interface
    # ──────────────────────────────────────────────
    def get_params(self) -> dict:
        return {'sigma': self.sigma}

    def __repr__(self):
        return f"BlackScholesModel(σ={self.sigma:.4f})"
