from dataclasses import dataclass
from decimal import Decimal
from datetime import datetime

Money = Decimal       # exact decimal, never float

@dataclass(frozen=True)
class PhoneCall:
    number: str                  # digits only, compared numerically on ties
    start: datetime              # naive local time
    end: datetime

    @property
    def duration_seconds(self) -> int:
        return int((self.end - self.start).total_seconds())

@dataclass(frozen=True)
class Tariff:
    standard_rate: Money         # per minute inside the peak window
    reduced_rate: Money          # per minute outside the peak window
    long_call_rate: Money        # every minute past the threshold
    peak_start_hour: int = 8     # inclusive
    peak_end_hour: int = 16      # exclusive
    long_call_threshold: int = 5 # minutes priced by time of day

@dataclass(frozen=True)
class CallCharge:
    call: PhoneCall
    minutes: int
    price: Money
    free: bool = False
