import logging
import yaml
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, Optional
from .datatypes import Tariff

logger = logging.getLogger(__name__)

CFG_PATH = Path(__file__).parent / 'data' / 'tariff_config.yaml'

_tariff_cache = None


class TariffConfigError(ValueError):
    pass


def load_tariff(path: Optional[Path] = None) -> Tariff:
    """
    Load the call tariff from YAML.

    The packaged config is read once and cached; passing an explicit
    ``path`` always reads that file and leaves the cache alone.
    """
    global _tariff_cache

    if path is None and _tariff_cache is not None:
        return _tariff_cache

    cfg_path = Path(path) if path is not None else CFG_PATH
    logger.debug(f"Loading tariff config from {cfg_path}")
    cfg = yaml.safe_load(cfg_path.read_text())
    tariff = tariff_from_dict(cfg)
    logger.info(f"Loaded tariff: standard {tariff.standard_rate}, reduced {tariff.reduced_rate}, "
                f"long call {tariff.long_call_rate} after {tariff.long_call_threshold} min")

    if path is None:
        _tariff_cache = tariff
    return tariff


def tariff_from_dict(cfg: Dict[str, Any]) -> Tariff:
    if not isinstance(cfg, dict):
        raise TariffConfigError("Tariff config must be a mapping")
    try:
        rates = cfg['rates']
        peak = cfg['peak_hours']
        tariff = Tariff(
            standard_rate=_rate(rates['standard']),
            reduced_rate=_rate(rates['reduced']),
            long_call_rate=_rate(rates['long_call']),
            peak_start_hour=int(peak['start']),
            peak_end_hour=int(peak['end']),
            long_call_threshold=int(cfg['long_call']['threshold_minutes']),
        )
    except TariffConfigError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise TariffConfigError(f"Missing or malformed tariff setting: {e}") from e

    if not 0 <= tariff.peak_start_hour < tariff.peak_end_hour <= 24:
        raise TariffConfigError(
            f"Peak hours must satisfy 0 <= start < end <= 24, "
            f"got {tariff.peak_start_hour}-{tariff.peak_end_hour}")
    if tariff.long_call_threshold < 0:
        raise TariffConfigError("Long call threshold cannot be negative")
    return tariff


def _rate(value) -> Decimal:
    # str() first so a YAML float like 0.2 becomes Decimal('0.2'), not its binary expansion
    try:
        rate = Decimal(str(value))
    except InvalidOperation as e:
        raise TariffConfigError(f"Rate {value!r} is not a decimal amount") from e
    if not rate.is_finite() or rate < 0:
        raise TariffConfigError(f"Rate {value!r} must be a non-negative amount")
    return rate


DEFAULT_TARIFF = Tariff(
    standard_rate=Decimal('1.00'),
    reduced_rate=Decimal('0.50'),
    long_call_rate=Decimal('0.20'),
)
