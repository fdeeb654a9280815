"""Tests for the command line entry point (offline commands only)."""

import logging
from decimal import Decimal

import pytest

from pumpfun_sdk import config
from pumpfun_sdk.cli import build_parser, main, to_base_units
from pumpfun_sdk.core.constants import LAMPORTS_PER_SOL
from pumpfun_sdk.core.pda import bonding_curve_address, creator_vault_address
from pumpfun_sdk.utils.logger import get_logger, set_log_level

from conftest import CREATOR, MINT


def test_derive_prints_curve_addresses(capsys):
    assert main(["derive", str(MINT), "--creator", str(CREATOR)]) == 0
    out = capsys.readouterr().out
    assert str(bonding_curve_address(MINT)) in out
    assert str(creator_vault_address(CREATOR)) in out


def test_derive_rejects_bad_mint():
    assert main(["derive", "not-a-pubkey"]) == 2


def test_sol_amounts_convert_exactly():
    """0.3 SOL is 300_000_000 lamports, not a float-truncated 299_999_999."""
    args = build_parser().parse_args(["quote-buy", str(MINT), "0.3"])
    assert args.sol == Decimal("0.3")
    assert to_base_units(args.sol, LAMPORTS_PER_SOL) == 300_000_000
    assert to_base_units(Decimal("1.5"), 10 ** 6) == 1_500_000


@pytest.mark.parametrize("amount", ["abc", "-1", "nan"])
def test_rejects_invalid_amounts(amount):
    with pytest.raises(SystemExit):
        build_parser().parse_args(["quote-sell", str(MINT), amount])


def test_log_level_from_config(monkeypatch):
    monkeypatch.setattr(config, "LOG_LEVEL", "DEBUG")
    try:
        assert main(["derive", str(MINT)]) == 0
        assert get_logger("pumpfun_sdk.cli").level == logging.DEBUG
    finally:
        set_log_level(logging.INFO)
