import logging
from collections import defaultdict
from datetime import timedelta
from typing import List, Optional

from .config import load_tariff
from .datatypes import Money, PhoneCall, Tariff
from .log_parser import parse_log

logger = logging.getLogger(__name__)


def calculate(phone_log: Optional[str], tariff: Optional[Tariff] = None) -> Money:
    """
    Total price of every call in ``phone_log``.

    1. Parse the log (any ParseError propagates unchanged).
    2. Pick the most frequently called number; its calls are free.
    3. Price each remaining call minute by minute and add it up.

    ``None`` or blank input costs nothing and is not parsed.
    """
    if phone_log is None or not phone_log.strip():
        return Money('0.00')

    tariff = tariff or load_tariff()
    calls = parse_log(phone_log)
    free_number = most_frequent_number(calls)
    logger.info(f"Pricing {len(calls)} calls, free number: {free_number}")

    total = Money('0.00')
    for call in calls:
        if call.number == free_number:
            continue
        total += call_price(call, tariff)

    logger.info(f"Total bill: {total}")
    return total


def most_frequent_number(calls: List[PhoneCall]) -> Optional[str]:
    """
    Number called most often, or None for no calls.

    Ties go to the number with the highest arithmetic value, so "100"
    beats "99". Numbers equal in value ("007" and "7") fall back to the
    string itself to keep the choice deterministic.
    """
    if not calls:
        return None

    frequencies = defaultdict(int)
    for call in calls:
        frequencies[call.number] += 1

    max_frequency = max(frequencies.values())
    candidates = [num for num, count in frequencies.items() if count == max_frequency]
    return max(candidates, key=lambda num: (int(num), num))


def call_price(call: PhoneCall, tariff: Tariff) -> Money:
    price = Money('0.00')
    for minute in range(duration_in_minutes(call)):
        price += minute_rate(call, minute, tariff)
    logger.debug(f"{call.number} {call.start:%d-%m-%Y %H:%M:%S}: {price}")
    return price


def minute_rate(call: PhoneCall, minute: int, tariff: Tariff) -> Money:
    """Price of the ``minute``-th started minute (0-based) of ``call``."""
    # Rule A – long calls: flat rate past the threshold, whatever the hour
    if minute >= tariff.long_call_threshold:
        return tariff.long_call_rate

    # Rule B – time of day, checked at the start of each minute
    hour = (call.start + timedelta(minutes=minute)).hour
    if tariff.peak_start_hour <= hour < tariff.peak_end_hour:
        return tariff.standard_rate
    return tariff.reduced_rate


def duration_in_minutes(call: PhoneCall) -> int:
    """Started minutes: any part of a minute counts as a whole one."""
    minutes, seconds = divmod(call.duration_seconds, 60)
    if seconds:
        minutes += 1
    return minutes
