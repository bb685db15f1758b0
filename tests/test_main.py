import re

from click.testing import CliRunner

from main import HEADER, cli
from pricing.settings import SETTINGS

ROW = re.compile(r"^\d+\.\d{2}\t2\^\d+\t\d+\.\d{2}\t-?\d+\.\d{4}$")


def _invoke(*args):
    return CliRunner().invoke(cli, list(args))


def test_bs_single_combination():
    result = _invoke("bs", "--alpha", "1.5", "--eta", "0.25", "--n", "10")
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0] == "Model = BS"
    assert lines[1] == HEADER == "eta\tN\talpha\tput"
    assert len(lines) == 3
    assert lines[2].startswith("0.25\t2^10\t1.50\t")
    assert ROW.match(lines[2])


def test_bs_sweeps_omitted_parameters():
    result = _invoke("bs")
    assert result.exit_code == 0, result.output
    rows = result.output.splitlines()[2:]
    assert len(rows) == len(SETTINGS.alphas) * len(SETTINGS.etas) * len(SETTINGS.exponents)
    assert all(ROW.match(row) for row in rows)
    assert rows[0].startswith("0.10\t2^6\t1.01\t")
    assert rows[-1].startswith("0.25\t2^10\t5.00\t")


def test_partial_sweep_over_alpha_only():
    result = _invoke("bs", "--eta", "0.25", "--n", "10")
    assert result.exit_code == 0, result.output
    rows = result.output.splitlines()[2:]
    assert [row.split("\t")[2] for row in rows] == [f"{a:.2f}" for a in SETTINGS.alphas]


def test_heston_and_vg_commands():
    heston = _invoke("heston", "--alpha", "1.5", "--eta", "0.25", "--n", "10")
    assert heston.exit_code == 0, heston.output
    assert heston.output.splitlines()[0] == "Model = Heston"
    assert ROW.match(heston.output.splitlines()[2])

    vg = _invoke("vg", "--k", "90", "--alpha", "1.5", "--eta", "0.25", "--n", "10")
    assert vg.exit_code == 0, vg.output
    assert vg.output.splitlines()[0] == "Model = VG"
    assert ROW.match(vg.output.splitlines()[2])


def test_invalid_model_parameters_are_rejected():
    result = _invoke("vg", "--theta", "2.0", "--nu", "0.5")
    assert result.exit_code != 0
    assert "convexity correction" in result.output


def test_invalid_transform_parameters_are_rejected():
    assert _invoke("bs", "--alpha", "0").exit_code != 0
    assert _invoke("bs", "--eta", "-0.1").exit_code != 0
    assert _invoke("bs", "--n", str(SETTINGS.max_exponent + 1)).exit_code != 0


def test_verbose_flag():
    result = _invoke("--verbose", "bs", "--alpha", "1.5", "--eta", "0.25", "--n", "6")
    assert result.exit_code == 0, result.output


def test_vg_risk_neutral_flag_changes_the_drift():
    args = ("vg", "--k", "90", "--alpha", "1.5", "--eta", "0.25", "--n", "10")
    default = _invoke(*args)
    martingale = _invoke(*args, "--risk-neutral")
    assert default.exit_code == 0, default.output
    assert martingale.exit_code == 0, martingale.output
    default_put = float(default.output.splitlines()[2].split("\t")[3])
    martingale_put = float(martingale.output.splitlines()[2].split("\t")[3])
    # ω > 0 lifts the call grid; parity with the same s0 lifts the put with it
    assert martingale_put > default_put
