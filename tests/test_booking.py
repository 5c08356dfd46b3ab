import unittest
from datetime import date, datetime, time

from reservation_desk import InvalidTimestamp, Reservation, combine_instant, is_future, parse_guests


class TestIsFuture(unittest.TestCase):
    def setUp(self) -> None:
        self.now = datetime(2026, 2, 24, 10, 0)

    def test_next_day_is_future(self) -> None:
        self.assertTrue(is_future("2026-02-25", "10:00", self.now))

    def test_one_minute_later_is_future(self) -> None:
        self.assertTrue(is_future("2026-02-24", "10:01", self.now))

    def test_previous_day_is_not_future(self) -> None:
        self.assertFalse(is_future("2026-02-23", "10:00", self.now))

    def test_equal_instant_is_not_future(self) -> None:
        self.assertFalse(is_future("2026-02-24", "10:00", self.now))

    def test_accepts_date_and_time_objects(self) -> None:
        self.assertTrue(is_future(date(2026, 2, 24), time(10, 30), self.now))

    def test_malformed_date_raises(self) -> None:
        with self.assertRaises(InvalidTimestamp):
            is_future("24/02/2026", "10:00", self.now)

    def test_malformed_time_raises(self) -> None:
        with self.assertRaises(InvalidTimestamp):
            is_future("2026-02-25", "25:99", self.now)

    def test_missing_parts_raise(self) -> None:
        with self.assertRaises(InvalidTimestamp):
            is_future(None, "10:00", self.now)
        with self.assertRaises(InvalidTimestamp):
            is_future("2026-02-25", None, self.now)
        with self.assertRaises(InvalidTimestamp):
            is_future("", "", self.now)

    def test_combine_instant_drops_seconds(self) -> None:
        self.assertEqual(combine_instant("2026-02-25", "18:30:45"), datetime(2026, 2, 25, 18, 30))


class TestParseGuests(unittest.TestCase):
    def test_numeric_text_is_parsed(self) -> None:
        self.assertEqual(parse_guests("4"), 4)
        self.assertEqual(parse_guests(" 6 "), 6)
        self.assertEqual(parse_guests(3), 3)
        self.assertEqual(parse_guests(2.0), 2)

    def test_missing_or_non_numeric_defaults_to_one(self) -> None:
        for value in (None, "", "abc", "2.5", 2.5, float("nan"), [], True):
            with self.subTest(value=value):
                self.assertEqual(parse_guests(value), 1)

    def test_non_positive_defaults_to_one(self) -> None:
        for value in ("0", "-3", 0, -1):
            with self.subTest(value=value):
                self.assertEqual(parse_guests(value), 1)


class TestReservationRecord(unittest.TestCase):
    def test_to_dict_uses_wire_field_names(self) -> None:
        record = Reservation(7, "Ana", date(2026, 3, 1), time(20, 15), guests=2, notes="terraza", phone="555")

        self.assertEqual(
            record.to_dict(),
            {
                "id": 7,
                "clientName": "Ana",
                "date": "2026-03-01",
                "time": "20:15",
                "guests": 2,
                "notes": "terraza",
                "phone": "555",
            },
        )

    def test_from_dict_defaults_optional_fields(self) -> None:
        record = Reservation.from_dict({"id": "3", "clientName": "Luis", "date": "2026-03-02", "time": "13:00"})

        self.assertEqual(record.id, 3)
        self.assertEqual(record.guests, 1)
        self.assertEqual(record.notes, "")
        self.assertEqual(record.phone, "")
        self.assertEqual(record.instant, datetime(2026, 3, 2, 13, 0))

    def test_from_dict_reads_celular_as_phone(self) -> None:
        record = Reservation.from_dict(
            {"id": 1, "clientName": "Eva", "date": "2026-03-02", "time": "13:00", "celular": "999"}
        )

        self.assertEqual(record.phone, "999")

    def test_from_dict_rejects_missing_required_field(self) -> None:
        with self.assertRaises(KeyError):
            Reservation.from_dict({"id": 1, "date": "2026-03-02", "time": "13:00"})

    def test_from_dict_rejects_null_or_blank_client_name(self) -> None:
        for name in (None, "", "   "):
            with self.subTest(name=name):
                with self.assertRaises(ValueError):
                    Reservation.from_dict({"id": 1, "clientName": name, "date": "2026-03-02", "time": "13:00"})

    def test_from_dict_rejects_non_positive_id(self) -> None:
        with self.assertRaises(ValueError):
            Reservation.from_dict({"id": 0, "clientName": "Eva", "date": "2026-03-02", "time": "13:00"})


if __name__ == "__main__":
    unittest.main()
