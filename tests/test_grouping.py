import sys
import unittest
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from reminders import ReminderItem
from views.grouping import UNSCHEDULED, day_key, group_reminders


class GroupRemindersTests(unittest.TestCase):
    def setUp(self):
        self.r1 = ReminderItem(title="r1", due=datetime(2024, 3, 5, 10, 0))
        self.r2 = ReminderItem(title="r2", due=datetime(2024, 3, 5, 18, 0))
        self.r3 = ReminderItem(title="r3", due=datetime(2024, 3, 6, 9, 0))

    def test_groups_by_start_of_day(self):
        grouped = group_reminders([self.r1, self.r2, self.r3])
        self.assertEqual(grouped, {
            date(2024, 3, 5): [self.r1, self.r2],
            date(2024, 3, 6): [self.r3],
        })

    def test_bucket_order_follows_input(self):
        grouped = group_reminders([self.r2, self.r3, self.r1])
        self.assertEqual(grouped[date(2024, 3, 5)], [self.r2, self.r1])

    def test_every_reminder_in_exactly_one_bucket(self):
        undated = ReminderItem(title="someday")
        all_day = ReminderItem(title="all day", due=date(2024, 3, 6))
        reminders = [self.r1, undated, self.r2, all_day, self.r3]
        grouped = group_reminders(reminders)
        flattened = [r for bucket in grouped.values() for r in bucket]
        self.assertEqual(len(flattened), len(reminders))
        for reminder in reminders:
            self.assertEqual(flattened.count(reminder), 1)
        self.assertEqual(grouped[date(2024, 3, 6)], [all_day, self.r3])

    def test_undated_reminders_use_sentinel(self):
        undated = ReminderItem(title="someday")
        grouped = group_reminders([undated, self.r1])
        self.assertEqual(grouped[UNSCHEDULED], [undated])
        self.assertEqual(UNSCHEDULED, date.min)

    def test_idempotent(self):
        reminders = [self.r1, self.r2, self.r3, ReminderItem(title="x")]
        self.assertEqual(group_reminders(reminders), group_reminders(reminders))

    def test_input_not_modified(self):
        reminders = [self.r3, self.r1]
        group_reminders(reminders)
        self.assertEqual(reminders, [self.r3, self.r1])

    def test_empty_input(self):
        self.assertEqual(group_reminders([]), {})
        self.assertEqual(group_reminders(None), {})

    def test_aware_due_converted_to_local_day(self):
        plus_two = timezone(timedelta(hours=2))
        late = ReminderItem(title="late", due=datetime(2024, 3, 5, 23, 30, tzinfo=timezone.utc))
        self.assertEqual(day_key(late, plus_two), date(2024, 3, 6))
        self.assertEqual(day_key(late), late.due.astimezone().date())
        self.assertEqual(group_reminders([late], plus_two), {date(2024, 3, 6): [late]})


if __name__ == "__main__":
    unittest.main()
