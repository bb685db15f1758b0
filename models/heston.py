"""
Heston Stochastic Volatility Model
====================================
Stock price dynamics:
    dS = (r - q)·S·dt + √v·S·dW₁
    dv = κ(θ - v)·dt + ξ√v·dW₂
    Corr(dW₁, dW₂) = ρ

Parameters:
    v0  : initial variance
    kappa (κ) : speed of mean reversion of variance
    theta (θ) : long-run variance level
    xi (ξ)    : volatility of variance ("vol of vol")
    rho (ρ)   : correlation between stock and variance Brownian motions

Feller condition: 2κθ > ξ² ensures variance stays positive.

The characteristic function has a semi-analytical closed form,
enabling FFT-based pricing.
"""

from dataclasses import dataclass

import numpy as np
from .base_model import BaseModel, ModelParameterError

# |b + d| or |g - 1| below this makes C and D blow up
_DEGENERACY_TOL = 1e-12


@dataclass(frozen=True)
class HestonModel(BaseModel):
    """Heston (1993) stochastic volatility model."""

    kappa: float
    theta: float
    xi: float
    rho: float
    v0: float

    name = "Heston"

    def validate(self):
        for field_name in ('kappa', 'theta', 'xi', 'rho', 'v0'):
            value = getattr(self, field_name)
            if not np.isfinite(value):
                raise ModelParameterError(f"{field_name} must be finite, got {value}")
        if self.kappa <= 0:
            raise ModelParameterError(f"kappa must be positive, got {self.kappa}")
        if self.theta < 0:
            raise ModelParameterError(f"theta must be non-negative, got {self.theta}")
        if self.xi <= 0:
            raise ModelParameterError(f"vol of vol xi must be positive, got {self.xi}")
        if not -1.0 <= self.rho <= 1.0:
            raise ModelParameterError(f"rho must lie in [-1, 1], got {self.rho}")
        if self.v0 < 0:
            raise ModelParameterError(f"v0 must be non-negative, got {self.v0}")

    def characteristic_function(self, u, t, s0, r, q=0.0):
        """
        Heston characteristic function (log-stock price under risk-neutral measure).

        Uses the formulation from Albrecher et al. (2007) which avoids
        the branch-cut discontinuity issue in the original Heston (1993) form.

        φ(u) = exp(C(u) + D(u)·v₀ + i·u·(ln S + (r-q)T))

        where:
            d = sqrt((ρξiu - κ)² + ξ²(iu + u²))
            g = (κ - ρξiu - d) / (κ - ρξiu + d)

            C = κθ/ξ² · [(κ - ρξiu - d)T - 2ln((1 - g·exp(-dT))/(1-g))]
            D = (κ - ρξiu - d)/ξ² · (1 - exp(-dT))/(1 - g·exp(-dT))
        """
        kappa, theta, xi, rho, v0 = self.kappa, self.theta, self.xi, self.rho, self.v0
        u = np.asarray(u, dtype=complex)

        x0 = np.log(s0)
        b = kappa - rho * xi * 1j * u

        # Principal branch; with g built from (b - d) the log below stays continuous
        d = np.sqrt((rho * xi * 1j * u - kappa)**2 + xi**2 * (1j * u + u**2))

        b_plus_d = b + d
        if np.any(np.isclose(b_plus_d, 0.0, rtol=0.0, atol=_DEGENERACY_TOL)):
            raise ModelParameterError(
                f"{self!r}: b + d vanishes, characteristic function undefined")
        g = (b - d) / b_plus_d
        if np.any(np.isclose(g, 1.0, rtol=0.0, atol=_DEGENERACY_TOL)):
            raise ModelParameterError(
                f"{self!r}: degenerate parameters give g = 1 in the C term")

        exp_neg_dT = np.exp(-d * t)

        C = (kappa * theta / xi**2
             * ((b - d) * t
                - 2 * np.log((1 - g * exp_neg_dT) / (1 - g))))

        D = ((b - d) / xi**2
             * (1 - exp_neg_dT) / (1 - g * exp_neg_dT))

        return np.exp(C + D * v0 + 1j * u * (x0 + (r - q) * t))

    def feller_condition(self) -> bool:
        """Check if 2κθ > ξ² (variance stays positive)."""
        return 2 * self.kappa * self.theta > self.xi**2

    # ──────────────────────────────────────────────
    #  Parameter Interface
    # ──────────────────────────────────────────────
    def get_params(self) -> dict:
        return {
            'kappa': self.kappa, 'theta': self.theta, 'xi': self.xi,
            'rho': self.rho, 'v0': self.v0
        }

    def __repr__(self):
        return (f"HestonModel(κ={self.kappa:.2f}, θ={self.theta:.4f}, "
                f"ξ={self.xi:.2f}, ρ={self.rho:.2f}, v0={self.v0:.4f})")
