"""
Tests for loading the tariff from YAML.
"""
import pytest
from decimal import Decimal
from pathlib import Path

from telephone_bill import config
from telephone_bill.config import DEFAULT_TARIFF, TariffConfigError, load_tariff, tariff_from_dict


VALID_CONFIG = """
rates:
  standard: "2.00"
  reduced: 0.2
  long_call: "0.10"
peak_hours:
  start: 7
  end: 19
long_call:
  threshold_minutes: 3
"""


@pytest.fixture()
def cfg_dict():
    return {
        'rates': {'standard': '1.00', 'reduced': '0.50', 'long_call': '0.20'},
        'peak_hours': {'start': 8, 'end': 16},
        'long_call': {'threshold_minutes': 5},
    }


@pytest.fixture()
def fresh_cache(monkeypatch):
    monkeypatch.setattr(config, "_tariff_cache", None)


def test_packaged_config_matches_default_rates(fresh_cache):
    tariff = load_tariff()
    assert tariff == DEFAULT_TARIFF
    assert tariff.standard_rate == Decimal("1.00")
    assert tariff.reduced_rate == Decimal("0.50")
    assert tariff.long_call_rate == Decimal("0.20")
    assert (tariff.peak_start_hour, tariff.peak_end_hour) == (8, 16)
    assert tariff.long_call_threshold == 5


def test_packaged_config_is_cached(fresh_cache):
    assert load_tariff() is load_tariff()


def test_explicit_path_bypasses_cache(fresh_cache, tmp_path):
    cfg_file = tmp_path / "tariff.yaml"
    cfg_file.write_text(VALID_CONFIG)

    default = load_tariff()
    custom = load_tariff(cfg_file)

    assert custom.standard_rate == Decimal("2.00")
    assert custom.long_call_threshold == 3
    assert load_tariff() is default


def test_float_rates_become_exact_decimals(tmp_path):
    cfg_file = tmp_path / "tariff.yaml"
    cfg_file.write_text(VALID_CONFIG)
    tariff = load_tariff(Path(cfg_file))

    # YAML reads 0.2 as a float; the tariff must hold exactly 0.2
    assert tariff.reduced_rate == Decimal("0.2")
    assert str(tariff.reduced_rate) == "0.2"


def test_from_dict(cfg_dict):
    assert tariff_from_dict(cfg_dict) == DEFAULT_TARIFF


class TestInvalidConfig:
    """Bad tariff files are rejected with TariffConfigError"""

    def test_missing_rate(self, cfg_dict):
        del cfg_dict['rates']['long_call']
        with pytest.raises(TariffConfigError):
            tariff_from_dict(cfg_dict)

    def test_missing_section(self, cfg_dict):
        del cfg_dict['peak_hours']
        with pytest.raises(TariffConfigError):
            tariff_from_dict(cfg_dict)

    def test_not_a_mapping(self):
        with pytest.raises(TariffConfigError):
            tariff_from_dict(None)

    @pytest.mark.parametrize("value", ["-0.50", "abc", "NaN"])
    def test_bad_rate(self, cfg_dict, value):
        cfg_dict['rates']['reduced'] = value
        with pytest.raises(TariffConfigError):
            tariff_from_dict(cfg_dict)

    @pytest.mark.parametrize("start, end", [(16, 8), (8, 8), (-1, 16), (8, 25)])
    def test_bad_peak_hours(self, cfg_dict, start, end):
        cfg_dict['peak_hours'] = {'start': start, 'end': end}
        with pytest.raises(TariffConfigError):
            tariff_from_dict(cfg_dict)

    def test_bad_hour_type(self, cfg_dict):
        cfg_dict['peak_hours']['start'] = "eight"
        with pytest.raises(TariffConfigError):
            tariff_from_dict(cfg_dict)

    def test_negative_threshold(self, cfg_dict):
        cfg_dict['long_call']['threshold_minutes'] = -1
        with pytest.raises(TariffConfigError):
            tariff_from_dict(cfg_dict)

    def test_error_is_value_error(self):
        assert issubclass(TariffConfigError, ValueError)
