from datetime import timedelta

import pytest

from src.service.hotel_booking.domain.pricing import calculate_nights, calculate_total_price
from test.service.hotel_booking.booking_test_constants import utc


@pytest.mark.unit
class TestCalculateNights:
    def test_whole_days(self) -> None:
        assert calculate_nights(utc(2025, 1, 10), utc(2025, 1, 13)) == 3

    def test_partial_day_rounds_up(self) -> None:
        assert calculate_nights(utc(2025, 1, 10, 14), utc(2025, 1, 13, 11)) == 3
        assert calculate_nights(utc(2025, 1, 10, 14), utc(2025, 1, 13, 15)) == 4

    def test_short_stay_is_one_night(self) -> None:
        assert calculate_nights(utc(2025, 1, 10, 14), utc(2025, 1, 10, 15)) == 1

    def test_monotone_in_check_out(self) -> None:
        check_in = utc(2025, 1, 10)
        previous = 0
        for hours in range(1, 24 * 5, 5):
            nights = calculate_nights(check_in, check_in + timedelta(hours=hours))
            assert nights >= 1
            assert nights >= previous
            previous = nights


@pytest.mark.unit
class TestCalculateTotalPrice:
    def test_nights_times_rate(self) -> None:
        assert calculate_total_price(nights=3, price_per_night=100) == 300

    def test_free_room(self) -> None:
        assert calculate_total_price(nights=2, price_per_night=0) == 0
