import pandas as pd
import logging
from typing import List, Optional
from .calculator import call_price, duration_in_minutes, most_frequent_number
from .config import load_tariff
from .datatypes import CallCharge, Money, PhoneCall, Tariff

logger = logging.getLogger(__name__)

# Column order of the printed breakdown
COLUMNS = [
    'Number',
    'Start',
    'End',
    'Minutes',
    'Free',
    'Price',
]

def itemize(calls: List[PhoneCall], tariff: Optional[Tariff] = None) -> List[CallCharge]:
    """
    Price each call separately, in log order.

    Calls to the free number are kept with a zero price so the breakdown
    shows every line of the log. The prices add up to ``calculate()``.
    """
    tariff = tariff or load_tariff()
    free_number = most_frequent_number(calls)

    charges = []
    for call in calls:
        if call.number == free_number:
            charges.append(CallCharge(call=call, minutes=duration_in_minutes(call),
                                      price=Money('0.00'), free=True))
        else:
            charges.append(CallCharge(call=call, minutes=duration_in_minutes(call),
                                      price=call_price(call, tariff)))

    logger.debug(f"Itemized {len(charges)} calls, free number: {free_number}")
    return charges

def total(charges: List[CallCharge]) -> Money:
    return sum((c.price for c in charges), Money('0.00'))

def to_frame(charges: List[CallCharge]) -> pd.DataFrame:
    """Breakdown as a DataFrame; prices stay Decimal (object dtype)."""
    rows = [_charge_to_dict(c) for c in charges]
    return pd.DataFrame(rows, columns=COLUMNS)

def _charge_to_dict(charge: CallCharge) -> dict:
    return {
        'Number': charge.call.number,
        'Start': charge.call.start,
        'End': charge.call.end,
        'Minutes': charge.minutes,
        'Free': charge.free,
        'Price': charge.price,
    }
