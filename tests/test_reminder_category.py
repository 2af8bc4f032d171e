"""Tests for history-based reminder categories."""

from datetime import timedelta

import pytest

from salonbook.schemas.reminder import ReminderCategory
from salonbook.services.reminder_category import (
    classify_reminder_category,
    count_by_category,
    filter_by_category,
)


def _days_ago(now, days: int) -> str:
    return (now - timedelta(days=days)).isoformat()


class TestClassifyReminderCategory:
    """Tests for classify_reminder_category."""

    def test_no_history_is_yet_to_send(self, make_customer, now):
        """An empty history is yet-to-send whatever else is set."""
        customer = make_customer(
            reminder_date="2026-10-01",
            reminder_sent_dates=["2026-10-01"],
            reminder_interval="1week",
        )
        assert classify_reminder_category(customer, now) == ReminderCategory.YET_TO_SEND

    def test_sent_exactly_now_is_sent_today(self, make_customer, now):
        customer = make_customer(sent=[now.isoformat()])
        assert classify_reminder_category(customer, now) == ReminderCategory.SENT_TODAY

    def test_sent_earlier_today_is_sent_today(self, make_customer, now):
        customer = make_customer(sent=["2026-10-18T00:05:00+05:30"])
        assert classify_reminder_category(customer, now) == ReminderCategory.SENT_TODAY

    def test_utc_timestamp_uses_local_calendar_day(self, make_customer, now):
        """20:00 UTC on the 17th is already the 18th in India."""
        customer = make_customer(sent=["2026-10-17T20:00:00Z"])
        assert classify_reminder_category(customer, now) == ReminderCategory.SENT_TODAY

    def test_one_day_ago_is_uncategorized(self, make_customer, now):
        customer = make_customer(sent=[_days_ago(now, 1)])
        assert classify_reminder_category(customer, now) is None

    @pytest.mark.parametrize(
        "days, expected",
        [
            (2, ReminderCategory.THREE_DAYS),
            (3, ReminderCategory.THREE_DAYS),
            (4, ReminderCategory.THREE_DAYS),
            (5, ReminderCategory.SEVEN_DAYS),
            (9, ReminderCategory.SEVEN_DAYS),
            (10, ReminderCategory.TWO_WEEKS),
            (18, ReminderCategory.TWO_WEEKS),
            (19, ReminderCategory.FOUR_WEEKS),
            (35, ReminderCategory.FOUR_WEEKS),
            (36, None),
            (50, None),
        ],
    )
    def test_window_boundaries(self, make_customer, now, days, expected):
        customer = make_customer(sent=[_days_ago(now, days)])
        assert classify_reminder_category(customer, now) == expected

    def test_last_entry_is_authoritative(self, make_customer, now):
        """Only the most recent send counts."""
        customer = make_customer(sent=[_days_ago(now, 20), _days_ago(now, 3)])
        assert classify_reminder_category(customer, now) == ReminderCategory.THREE_DAYS

    def test_naive_timestamp_is_local_time(self, make_customer, now):
        customer = make_customer(sent=["2026-10-15T09:00:00"])
        assert classify_reminder_category(customer, now) == ReminderCategory.THREE_DAYS

    def test_malformed_timestamp_is_uncategorized(self, make_customer, now):
        customer = make_customer(sent=["last tuesday"])
        assert classify_reminder_category(customer, now) is None


class TestFilterByCategory:
    """Tests for filter_by_category."""

    def test_all_returns_input_unchanged(self, make_customer, now):
        customers = [
            make_customer(),
            make_customer(sent=[now.isoformat()]),
            make_customer(sent=["garbage"]),
        ]
        result = filter_by_category(customers, "all", now)

        assert result == customers
        assert result is not customers

    def test_keeps_matching_customers_in_order(self, make_customer, now):
        a = make_customer(sent=[_days_ago(now, 3)])
        b = make_customer()
        c = make_customer(sent=[_days_ago(now, 4)])
        d = make_customer(sent=[_days_ago(now, 7)])

        result = filter_by_category([a, b, c, d], ReminderCategory.THREE_DAYS, now)

        assert [x.id for x in result] == [a.id, c.id]

    def test_accepts_category_value_string(self, make_customer, now):
        customers = [make_customer(), make_customer(sent=[now.isoformat()])]
        assert filter_by_category(customers, "yet-to-send", now) == customers[:1]

    def test_unknown_selector_raises(self, make_customer, now):
        with pytest.raises(ValueError):
            filter_by_category([make_customer()], "overdue", now)


class TestCountByCategory:
    """Tests for count_by_category."""

    def test_every_category_present(self, now):
        counts = count_by_category([], now)
        assert set(counts) == set(ReminderCategory)
        assert sum(counts.values()) == 0

    def test_counts_sum_to_total_when_all_categorized(self, make_customer, now):
        customers = [
            make_customer(),
            make_customer(sent=[now.isoformat()]),
            make_customer(sent=[_days_ago(now, 3)]),
            make_customer(sent=[_days_ago(now, 6)]),
            make_customer(sent=[_days_ago(now, 12)]),
            make_customer(sent=[_days_ago(now, 30)]),
            make_customer(sent=[_days_ago(now, 2)]),
        ]
        counts = count_by_category(customers, now)

        assert sum(counts.values()) == len(customers)
        assert counts[ReminderCategory.THREE_DAYS] == 2
        assert counts[ReminderCategory.YET_TO_SEND] == 1

    def test_old_reminders_are_not_counted(self, make_customer, now):
        """A 50-day-old reminder falls outside every window."""
        customers = [
            make_customer(),
            make_customer(sent=[_days_ago(now, 50)]),
        ]
        counts = count_by_category(customers, now)

        assert sum(counts.values()) == 1
        assert counts[ReminderCategory.YET_TO_SEND] == 1
