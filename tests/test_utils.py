from datetime import date, datetime
from decimal import Decimal

import pytest

from clinicpos.utils.barcode import BarcodeScanBuffer
from clinicpos.utils.bill_numbers import bill_no_matches, normalize_bill_no
from clinicpos.utils.date_range import DatePeriod, DateRange, get_date_range, is_date_in_range
from clinicpos.utils.formatting import capitalize_gender, money, next_code, to_decimal

# Wednesday
TODAY = date(2024, 1, 10)


@pytest.mark.unit
class TestDateRange:
    """Named periods resolved to inclusive ISO date ranges."""

    def test_all_means_no_filter(self) -> None:
        """Test that the 'all' period disables filtering."""
        assert get_date_range("all", today=TODAY) is None

    def test_unknown_period(self) -> None:
        """Test that an unrecognised period disables filtering."""
        assert get_date_range("fortnight", today=TODAY) is None

    def test_today_and_yesterday(self) -> None:
        """Test single-day periods."""
        assert get_date_range(DatePeriod.TODAY, today=TODAY) == ("2024-01-10", "2024-01-10")
        assert get_date_range("yesterday", today=TODAY) == ("2024-01-09", "2024-01-09")

    def test_weeks_start_on_monday(self) -> None:
        """Test this_week and last_week boundaries."""
        assert get_date_range("this_week", today=TODAY) == ("2024-01-08", "2024-01-14")
        assert get_date_range("last_week", today=TODAY) == ("2024-01-01", "2024-01-07")

    def test_sunday_belongs_to_the_week_before(self) -> None:
        """Test that a Sunday resolves to the Monday six days earlier."""
        assert get_date_range("this_week", today=date(2024, 1, 14)) == ("2024-01-08", "2024-01-14")

    def test_last_month_rolls_back_over_new_year(self) -> None:
        """Test that January's last month is December of the previous year."""
        assert get_date_range("last_month", today=TODAY) == ("2023-12-01", "2023-12-31")

    def test_this_month_in_leap_february(self) -> None:
        """Test month end in a leap year."""
        assert get_date_range("this_month", today=date(2024, 2, 5)) == ("2024-02-01", "2024-02-29")

    def test_custom_range(self) -> None:
        """Test custom bounds, a lone start date, and missing bounds."""
        assert get_date_range("custom", "2024-01-01", "2024-01-31") == ("2024-01-01", "2024-01-31")
        assert get_date_range("custom", "2024-01-05") == ("2024-01-05", "2024-01-05")
        assert get_date_range("custom") is None
        assert get_date_range("custom", "", "2024-01-31") is None

    def test_month_year(self) -> None:
        """Test explicit YYYY-MM months, including malformed input."""
        assert get_date_range("month_year", month_year="2023-11") == ("2023-11-01", "2023-11-30")
        assert get_date_range("month_year", month_year="2023-2") == ("2023-02-01", "2023-02-28")
        assert get_date_range("month_year", month_year="2023-13") is None
        assert get_date_range("month_year", month_year="Nov 2023") is None

    def test_is_date_in_range(self) -> None:
        """Test inclusive membership for dates, datetimes and strings."""
        rng = DateRange("2024-01-01", "2024-01-31")
        assert is_date_in_range(date(2024, 1, 1), rng)
        assert is_date_in_range(datetime(2024, 1, 31, 23, 59), rng)
        assert is_date_in_range("2024-01-15T08:00:00", rng)
        assert not is_date_in_range(date(2024, 2, 1), rng)
        assert not is_date_in_range(None, rng)
        assert is_date_in_range(None, None)


@pytest.mark.unit
class TestBillNumbers:
    """Loose invoice-number matching."""

    def test_zero_padding_and_separators_are_ignored(self) -> None:
        """Test that padded and unpadded numbers normalize the same way."""
        assert normalize_bill_no("IAR-0017") == normalize_bill_no("IAR00017") == "iar:17"
        assert normalize_bill_no(" inv_0042 ") == "inv:42"

    def test_prefix_only_and_free_text(self) -> None:
        """Test codes without digits and strings that are not codes."""
        assert normalize_bill_no("INV") == "inv:"
        assert normalize_bill_no("A1B2") == "a1b2"

    def test_matches(self) -> None:
        """Test matching rules including empty input."""
        assert bill_no_matches("inv-0001", "INV-0001")
        assert bill_no_matches("INV1", "INV-0001")
        assert not bill_no_matches("INV-2", "INV-0001")
        assert not bill_no_matches("", "INV-0001")
        assert not bill_no_matches("INV-1", "")


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


def _type(buffer: BarcodeScanBuffer, clock: FakeClock, text: str, gap_ms: float = 10, **flags):
    result = None
    for key in list(text) + ["Enter"]:
        result = buffer.feed(key, **flags)
        clock.advance(gap_ms)
    return result


@pytest.mark.unit
class TestBarcodeScanBuffer:
    """Scanner input versus human typing."""

    def setup_method(self) -> None:
        self.scanned = []
        self.clock = FakeClock()
        self.buffer = BarcodeScanBuffer(self.scanned.append, clock=self.clock)

    def test_fast_keys_then_enter_emit_a_scan(self) -> None:
        """Test that a quick burst followed by Enter is reported."""
        assert _type(self.buffer, self.clock, "PCM-2401") == "PCM-2401"
        assert self.scanned == ["PCM-2401"]

    def test_short_codes_are_ignored(self) -> None:
        """Test the minimum code length."""
        assert _type(self.buffer, self.clock, "12") is None
        assert self.scanned == []

    def test_slow_typing_is_not_a_scan(self) -> None:
        """Test that a pause longer than the limit restarts the buffer."""
        assert _type(self.buffer, self.clock, "12345", gap_ms=200) is None
        assert self.scanned == []

    def test_keys_inside_inputs_are_ignored(self) -> None:
        """Test that focused form fields swallow scanner keys."""
        assert _type(self.buffer, self.clock, "12345", in_input=True) is None
        assert self.scanned == []

    def test_modifier_and_named_keys_are_not_buffered(self) -> None:
        """Test that shortcuts and non-printable keys are skipped."""
        self.buffer.feed("A")
        self.buffer.feed("c", ctrl=True)
        self.buffer.feed("Shift")
        self.buffer.feed("B")
        self.buffer.feed("C")
        assert self.buffer.feed("Enter") == "ABC"

    def test_buffer_clears_after_enter(self) -> None:
        """Test that consecutive scans are independent."""
        _type(self.buffer, self.clock, "111")
        _type(self.buffer, self.clock, "222")
        assert self.scanned == ["111", "222"]


@pytest.mark.unit
class TestFormatting:
    """Display and code helpers."""

    def test_capitalize_gender(self) -> None:
        """Test gender display values."""
        assert capitalize_gender(None) == "-"
        assert capitalize_gender("") == "-"
        assert capitalize_gender("MALE") == "Male"
        assert capitalize_gender("female") == "Female"
        assert capitalize_gender("other") == "Other"
        assert capitalize_gender("OTHER") == "Other"
        assert capitalize_gender("nON-binary") == "Non-binary"

    def test_next_code(self) -> None:
        """Test zero-padded sequential codes."""
        assert next_code("PAT", 7) == "PAT-0007"
        assert next_code("INV", 12345) == "INV-12345"
        assert next_code("LAB", 3, width=6) == "LAB-000003"

    def test_money_rounds_half_up(self) -> None:
        """Test rounding to cents."""
        assert money("2.005") == Decimal("2.01")
        assert money(None) == Decimal("0.00")
        assert to_decimal("") == Decimal("0")
