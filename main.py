"""
main.py — Command-line put pricing via the Carr-Madan FFT
===========================================================
One command per model:

    fft-pricer bs      --sigma 0.3
    fft-pricer heston  --kappa 2.0 --theta 0.05 --vol-of-vol 0.3 --rho -0.7 --v0 0.04
    fft-pricer vg      --sigma 0.3 --nu 0.5 --theta -0.4

Any of --alpha, --eta, --n that is omitted is swept over its default set.
Output is a tab-separated table: eta, N, alpha, put.

Run: python main.py bs --help
"""

import logging
import sys
from typing import Optional

import click

from models.base_model import BaseModel, ModelParameterError
from models.black_scholes import BlackScholesModel
from models.heston import HestonModel
from models.variance_gamma import VarianceGammaModel
from pricing.fft_pricer import SweepResult, sweep_transform_params
from pricing.settings import SETTINGS

logger = logging.getLogger(__name__)

HEADER = "eta\tN\talpha\tput"


def format_row(result: SweepResult) -> str:
    return f"{result.eta:.2f}\t2^{result.n}\t{result.alpha:.2f}\t{result.put:.4f}"


def market_options(func):
    """Spot, strike, rates, maturity and transform options shared by every model."""
    options = [
        click.option('--s0', type=float, default=100.0, show_default=True, help='Spot price'),
        click.option('--k', 'strike', type=click.FloatRange(min=0, min_open=True),
                     default=80.0, show_default=True, help='Strike price'),
        click.option('--r', type=float, default=0.055, show_default=True, help='Risk-free rate'),
        click.option('--q', type=float, default=0.03, show_default=True, help='Dividend yield'),
        click.option('--t', type=click.FloatRange(min=0, min_open=True),
                     default=1.0, show_default=True, help='Time to maturity (years)'),
        click.option('--alpha', type=click.FloatRange(min=0, min_open=True), default=None,
                     help='FFT damping factor (swept if omitted)'),
        click.option('--eta', type=click.FloatRange(min=0, min_open=True), default=None,
                     help='FFT frequency step (swept if omitted)'),
        click.option('--n', type=click.IntRange(0, SETTINGS.max_exponent), default=None,
                     help='FFT exponent, N = 2^n (swept if omitted)'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def run_sweep(model: BaseModel, s0: float, strike: float, r: float, q: float,
              t: float, alpha: Optional[float], eta: Optional[float],
              n: Optional[int]) -> None:
    """Print the put table for one model and exit non-zero if any row failed."""
    alphas = [alpha] if alpha is not None else SETTINGS.alphas
    etas = [eta] if eta is not None else SETTINGS.etas
    exponents = [n] if n is not None else SETTINGS.exponents

    if isinstance(model, HestonModel) and not model.feller_condition():
        logger.warning("Feller condition 2κθ > ξ² fails for %r", model)

    click.echo(f"Model = {model.name}")
    click.echo(HEADER)

    failures = 0
    for result in sweep_transform_params(model, s0, r, q, t, strike,
                                         alphas=alphas, etas=etas,
                                         exponents=exponents):
        if result.ok:
            click.echo(format_row(result))
        else:
            failures += 1
            click.echo(f"skipped eta={result.eta:.2f} N=2^{result.n} "
                       f"alpha={result.alpha:.2f}: {result.error}", err=True)

    if failures:
        sys.exit(1)


def build_model(cls, **params) -> BaseModel:
    try:
        return cls(**params)
    except ModelParameterError as exc:
        raise click.BadParameter(str(exc)) from exc


@click.group()
@click.option('--verbose', is_flag=True, help='Verbose output')
def cli(verbose: bool):
    """European put pricing via the Carr-Madan FFT."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@market_options
@click.option('--sigma', type=float, default=0.3, show_default=True, help='Volatility')
def bs(s0, strike, r, q, t, alpha, eta, n, sigma):
    """Black-Scholes put pricing via Carr-Madan FFT."""
    model = build_model(BlackScholesModel, sigma=sigma)
    run_sweep(model, s0, strike, r, q, t, alpha, eta, n)


@cli.command()
@market_options
@click.option('--kappa', type=float, default=2.0, show_default=True, help='Mean reversion speed')
@click.option('--theta', type=float, default=0.05, show_default=True, help='Long-run variance')
@click.option('--vol-of-vol', 'xi', type=float, default=0.3, show_default=True, help='Volatility of variance')
@click.option('--rho', type=float, default=-0.7, show_default=True, help='Spot/variance correlation')
@click.option('--v0', type=float, default=0.04, show_default=True, help='Initial variance')
def heston(s0, strike, r, q, t, alpha, eta, n, kappa, theta, xi, rho, v0):
    """Heston put pricing via Carr-Madan FFT."""
    model = build_model(HestonModel, kappa=kappa, theta=theta, xi=xi, rho=rho, v0=v0)
    run_sweep(model, s0, strike, r, q, t, alpha, eta, n)


@cli.command()
@market_options
@click.option('--sigma', type=float, default=0.3, show_default=True, help='Brownian volatility')
@click.option('--nu', type=float, default=0.5, show_default=True, help='Gamma variance rate')
@click.option('--theta', type=float, default=-0.4, show_default=True, help='Brownian drift (skew)')
@click.option('--risk-neutral', is_flag=True,
              help='Use the martingale drift correction instead of the default one')
def vg(s0, strike, r, q, t, alpha, eta, n, sigma, nu, theta, risk_neutral):
    """Variance-Gamma put pricing via Carr-Madan FFT."""
    model = build_model(VarianceGammaModel, sigma=sigma, nu=nu, theta=theta,
                        risk_neutral=risk_neutral)
    run_sweep(model, s0, strike, r, q, t, alpha, eta, n)


if __name__ == '__main__':
    cli()
