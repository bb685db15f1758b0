"""
Base class for all pricing models.
Every model must implement its characteristic function, which is then used
by the FFT pricer to compute option prices across all strikes simultaneously.

Models hold model parameters only. Market inputs (spot, rates, maturity) are
passed to every evaluation, so one parameter set can be reused across a sweep.
"""

from abc import ABC, abstractmethod
import numpy as np


class ModelParameterError(ValueError):
    """Raised when model parameters fall outside the model's domain."""


class BaseModel(ABC):
    """Abstract base class for characteristic-function models."""

    name = "base"

    def __post_init__(self):
        self.validate()

    @abstractmethod
    def characteristic_function(self, u, t: float, s0: float, r: float,
                                q: float = 0.0):
        """
        Return the characteristic function φ(u) = E[exp(i·u·ln(S_T))]
        evaluated under the risk-neutral measure.

        This is the Fourier transform of the log-price density and is
        the key building block for FFT-based option pricing.

        Parameters
        ----------
        u  : complex or np.ndarray – Frequency-domain variable (can be complex)
        t  : float – Time to maturity in years
        s0 : float – Current spot price
        r  : float – Risk-free rate (annualized, continuous compounding)
        q  : float – Continuous dividend yield

        Returns
        -------
        complex or np.ndarray – Characteristic function values
        """
        pass

    @abstractmethod
    def validate(self):
        """Raise ModelParameterError if the parameters are unusable."""
        pass

    @abstractmethod
    def get_params(self) -> dict:
        """Return current model parameters as a dictionary."""
        pass


def forward_price(s0: float, r: float, q: float, t: float) -> float:
    """Risk-neutral forward price: F = S·exp((r-q)·T)"""
    return s0 * np.exp((r - q) * t)


def discount_factor(r: float, t: float) -> float:
    """Discount factor: exp(-r·T)"""
    return np.exp(-r * t)
