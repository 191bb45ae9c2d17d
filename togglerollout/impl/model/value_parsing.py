from datetime import datetime, timezone
from numbers import Number
from typing import Any, Optional

import pyrfc3339

_epoch = datetime.fromtimestamp(0, timezone.utc)


def is_number(input: Any) -> bool:
    # bool is a subtype of int, and we don't want to try and treat it as a number.
    return isinstance(input, Number) and not isinstance(input, bool)


def parse_time(input: Any) -> Optional[float]:
    """
    :param input: Either a number as milliseconds since Unix Epoch, or a string as a valid RFC3339 timestamp
    :return: milliseconds since Unix epoch, or None if input was invalid.
    """

    if is_number(input):
        return float(input)

    if isinstance(input, str):
        try:
            parsed_time = pyrfc3339.parse(input)
            timestamp = (parsed_time - _epoch).total_seconds()
            return timestamp * 1000.0
        except Exception:
            return None

    return None
