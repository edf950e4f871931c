from .calculator import calculate
from .log_parser import (ParseError, MalformedLineError, MalformedTimestampError,
                         MalformedNumberError, InvalidCallIntervalError)
