"""
Frozen configuration for the FFT pricer.

Default transform-parameter sweep sets and the upper bound on the FFT size.
All configuration is immutable so that every sweep is reproducible.
"""

import os
from dataclasses import dataclass, field
from typing import Final, Tuple

#: Damping factors swept when --alpha is omitted
DEFAULT_ALPHAS: Final[Tuple[float, ...]] = (1.01, 1.25, 1.50, 1.75, 2.00, 5.00)

#: Frequency-grid steps swept when --eta is omitted
DEFAULT_ETAS: Final[Tuple[float, ...]] = (0.10, 0.25)

#: FFT exponents (N = 2**n) swept when --n is omitted
DEFAULT_EXPONENTS: Final[Tuple[int, ...]] = (6, 10)

#: N = 2**20 complex points is ~16 MB per grid
_MAX_FFT_EXPONENT_DEFAULT: Final[int] = 20


def _resolve_max_exponent() -> int:
    """
    Resolve the largest accepted FFT exponent.

    Priority:
    1. FFT_PRICER_MAX_EXPONENT environment variable (if set)
    2. Default: 20
    """
    env_value = os.environ.get("FFT_PRICER_MAX_EXPONENT")
    if env_value:
        try:
            value = int(env_value)
        except ValueError:
            raise ValueError(
                f"FFT_PRICER_MAX_EXPONENT must be an integer, got {env_value!r}"
            ) from None
        if value < 0:
            raise ValueError(f"FFT_PRICER_MAX_EXPONENT must be >= 0, got {value}")
        return value
    return _MAX_FFT_EXPONENT_DEFAULT


@dataclass(frozen=True)
class SweepSettings:
    """
    Immutable sweep configuration.

    Attributes
    ----------
    alphas : tuple of float
        Damping factors
    etas : tuple of float
        Frequency-grid steps
    exponents : tuple of int
        FFT exponents n, transform length N = 2**n
    max_exponent : int
        Largest n accepted by TransformParams
    """

    alphas: Tuple[float, ...] = DEFAULT_ALPHAS
    etas: Tuple[float, ...] = DEFAULT_ETAS
    exponents: Tuple[int, ...] = DEFAULT_EXPONENTS
    max_exponent: int = field(default_factory=_resolve_max_exponent)


SETTINGS: Final[SweepSettings] = SweepSettings()
