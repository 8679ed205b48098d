"""Tests for DexPoolRecord."""
import pytest
import ujson

from active_pools.core.models import DexPoolRecord, SymbolKey

PAIR = "0xB4e16d0168e52d35CaCD2c6185b44281Ec28C9Dc"
USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"


def make_record(**overrides) -> DexPoolRecord:
    values = dict(
        pair_address=PAIR,
        token0_address=USDC,
        token1_address=WETH,
        token0_symbol="USDC",
        token1_symbol="WETH",
        token0_reserves=1000,
        token1_reserves=2000,
        token0_reserve_balance_of=1000,
        token1_reserve_balance_of=2000,
        block_num=17000000,
    )
    values.update(overrides)
    return DexPoolRecord(**values)


class TestDexPoolRecord:

    def test_matching_reserves_not_strange(self):
        assert make_record().strange_reserves is False

    @pytest.mark.parametrize("overrides", [
        {"token0_reserve_balance_of": 1001},
        {"token1_reserve_balance_of": 0},
        {"token0_reserves": 0, "token1_reserves": 0},
    ])
    def test_mismatch_is_strange(self, overrides):
        assert make_record(**overrides).strange_reserves is True

    def test_records_are_immutable(self):
        record = make_record()

        with pytest.raises(AttributeError):
            record.token0_reserves = 5

    def test_to_dict_encodes_big_integers_as_strings(self):
        data = make_record(token0_reserves=2**64 + 1, token0_reserve_balance_of=2**64 + 1).to_dict()

        assert data["token0_reserves"] == "18446744073709551617"
        assert data["token0_reserve_balance_of"] == "18446744073709551617"
        assert data["token1_reserves"] == "2000"
        assert data["block_num"] == 17000000
        assert data["strange_reserves"] is False

    def test_to_dict_checksums_addresses_and_keeps_missing_symbols(self):
        record = make_record(pair_address=PAIR.lower(), token1_symbol=None)

        data = record.to_dict()

        assert data["pair_address"] == PAIR
        assert data["token1_symbol"] is None

    def test_big_reserve_survives_json(self):
        big = 2**64 * 12345 + 6789
        record = make_record(token1_reserves=big, token1_reserve_balance_of=big - 1)

        text = ujson.dumps([record.to_dict()])
        restored = DexPoolRecord.from_dict(ujson.loads(text)[0])

        assert f'"{big}"' in text
        assert restored == record
        assert restored.strange_reserves is True


def test_symbol_key_is_hashable():
    assert {SymbolKey(1, USDC): "USDC"}[SymbolKey(1, USDC)] == "USDC"
