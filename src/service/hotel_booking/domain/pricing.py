"""
Stay pricing

Pure functions; callers reject check_out <= check_in before calling.
"""

import math
from datetime import datetime, timedelta


ONE_NIGHT = timedelta(days=1)


def calculate_nights(check_in: datetime, check_out: datetime) -> int:
    # A partial day still counts as a full night
    return math.ceil((check_out - check_in) / ONE_NIGHT)


def calculate_total_price(*, nights: int, price_per_night: int) -> int:
    return nights * price_per_night
