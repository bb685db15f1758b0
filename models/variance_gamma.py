"""
Variance Gamma Model
=====================
The VG model (Madan, Carr & Chang 1998) captures:
- Skewness in returns (via θ parameter)
- Excess kurtosis / fat tails (via ν parameter)
- Pure jump process (no diffusion component)

Construction:
    X_VG(t) = θ·G(t) + σ·W(G(t))

    where G(t) is a Gamma process with mean rate 1 and variance rate ν.
    This is Brownian motion with drift, time-changed by a Gamma process.

Stock price:
    S(t) = S(0)·exp((r - q + ω)t + X_VG(t))
    where ω = -(1/ν)·ln(1 - θν - σ²ν/2) is the drift correction.

    With risk_neutral=True the correction is ω = +(1/ν)·ln(1 - θν - σ²ν/2)
    instead, which makes the discounted price a martingale:
    E[S(T)] = S(0)·exp((r-q)T).

Parameters:
    sigma (σ) : volatility of the Brownian motion component
    nu (ν)    : variance rate of the Gamma time change (controls kurtosis)
    theta (θ) : drift of the Brownian motion (controls skewness)

The convexity correction only exists when 1 - θν - σ²ν/2 > 0; parameter
sets outside that region are rejected at construction.
"""

from dataclasses import dataclass

import numpy as np
from .base_model import BaseModel, ModelParameterError


@dataclass(frozen=True)
class VarianceGammaModel(BaseModel):
    """Variance Gamma (VG) option pricing model."""

    sigma: float
    nu: float
    theta: float
    risk_neutral: bool = False

    name = "VG"

    def validate(self):
        for field_name in ('sigma', 'nu', 'theta'):
            value = getattr(self, field_name)
            if not np.isfinite(value):
                raise ModelParameterError(f"{field_name} must be finite, got {value}")
        if self.sigma < 0:
            raise ModelParameterError(f"sigma must be non-negative, got {self.sigma}")
        if self.nu <= 0:
            raise ModelParameterError(f"nu must be positive, got {self.nu}")
        arg = self._omega_argument()
        if arg <= 0:
            raise ModelParameterError(
                f"1 - θν - σ²ν/2 = {arg:.6g} <= 0 for {self!r}; "
                "convexity correction ω is undefined")

    def _omega_argument(self) -> float:
        return 1 - self.theta * self.nu - 0.5 * self.sigma**2 * self.nu

    @property
    def omega(self) -> float:
        """
        Drift correction:
        ω = -(1/ν)·ln(1 - θν - σ²ν/2)

        With risk_neutral=True the sign flips to ω = (1/ν)·ln(1 - θν - σ²ν/2),
        the martingale correction giving E[S(T)] = S(0)·exp((r-q)T).
        """
        log_arg = np.log(self._omega_argument()) / self.nu
        return log_arg if self.risk_neutral else -log_arg

    def characteristic_function(self, u, t, s0, r, q=0.0):
        """
        VG characteristic function of log-price:

        φ(u) = exp(i·u·(ln S + (r-q+ω)T)) · (1 - i·u·θ·ν + σ²ν·u²/2)^(-T/ν)

        The power uses the principal branch; the base keeps a positive real
        part along the damped contour u = v - i(α+1) for admissible α.
        """
        x0 = np.log(s0)
        sigma, nu, theta = self.sigma, self.nu, self.theta

        drift = (r - q + self.omega) * t

        # VG characteristic exponent
        vg_char = (1 - 1j * u * theta * nu + 0.5 * sigma**2 * nu * u**2) ** (-t / nu)

        return np.exp(1j * u * (x0 + drift)) * vg_char

    # ──────────────────────────────────────────────
    #  Parameter Interface
    # ──────────────────────────────────────────────
    def get_params(self) -> dict:
        return {'sigma': self.sigma, 'nu': self.nu, 'theta': self.theta,
                'risk_neutral': self.risk_neutral}

    def __repr__(self):
        flag = ", risk_neutral" if self.risk_neutral else ""
        return (f"VarianceGammaModel(σ={self.sigma:.4f}, ν={self.nu:.4f}, "
                f"θ={self.theta:.4f}{flag})")
