from datetime import date

from certtracker.domain.services import add_months, compute_expiration


class TestMonthArithmetic:
    def test_clamps_to_end_of_shorter_month(self):
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)

    def test_non_leap_february(self):
        assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)

    def test_crosses_year_boundary(self):
        assert add_months(date(2024, 11, 15), 3) == date(2025, 2, 15)

    def test_three_year_validity(self):
        assert compute_expiration(date(2024, 1, 15), 36) == date(2027, 1, 15)

    def test_leap_day_plus_twelve_months(self):
        assert compute_expiration(date(2024, 2, 29), 12) == date(2025, 2, 28)
