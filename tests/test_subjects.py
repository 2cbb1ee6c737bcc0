import unittest

from gradecalc.core.subjects import (
    DEFAULT_CREDITS,
    Subject,
    clear_subject,
    edit_credits,
    edit_marks,
    edit_name,
    new_subject,
    normalize_number,
    parse_number,
)


class SubjectDefaultsTests(unittest.TestCase):
    def test_new_subject_defaults(self):
        subject = new_subject()
        self.assertEqual(subject.name, "")
        self.assertEqual(subject.credits, DEFAULT_CREDITS)
        self.assertIsNone(subject.marks)
        self.assertIsNone(subject.grade)

    def test_ids_are_unique(self):
        ids = {new_subject().id for _ in range(200)}
        self.assertEqual(len(ids), 200)

    def test_grade_follows_marks(self):
        subject = Subject(id="x", marks=82)
        self.assertEqual(subject.grade.letter, "A+")
        self.assertEqual(subject.grade.points, 9)


class ParseNumberTests(unittest.TestCase):
    def test_integral_text_gives_int(self):
        self.assertEqual(parse_number("4"), 4)
        self.assertIsInstance(parse_number("4.0"), int)

    def test_fractional_text_gives_float(self):
        self.assertEqual(parse_number(" 72.5 "), 72.5)

    def test_garbage_is_none(self):
        for raw in ("", "abc", "nan", "inf", "-inf", "1e400", ".", "-", "4,5"):
            self.assertIsNone(parse_number(raw), raw)

    def test_python_only_forms_rejected(self):
        for raw in ("1_00", "١٠", "９０", "0x10", "Infinity"):
            self.assertIsNone(parse_number(raw), raw)

    def test_decimal_forms_accepted(self):
        self.assertEqual(parse_number("5."), 5)
        self.assertEqual(parse_number(".5"), 0.5)
        self.assertEqual(parse_number("+7"), 7)
        self.assertEqual(parse_number("1e2"), 100)

    def test_large_integral_values_stay_float(self):
        value = parse_number("1e308")
        self.assertIsInstance(value, float)
        self.assertEqual(value, 1e308)
        self.assertIsInstance(parse_number("9007199254740991"), int)
        self.assertIsInstance(parse_number("9007199254740992"), float)

    def test_normalize_number(self):
        self.assertIsInstance(normalize_number(4.0), int)
        self.assertIsInstance(normalize_number(2**60), float)
        with self.assertRaises(OverflowError):
            normalize_number(10**400)


class EditPolicyTests(unittest.TestCase):
    def setUp(self):
        self.subject = Subject(id="s1", name="Maths", credits=3, marks=75)

    def test_marks_accepts_range(self):
        self.assertEqual(edit_marks(self.subject, "0").marks, 0)
        self.assertEqual(edit_marks(self.subject, "100").marks, 100)
        self.assertEqual(edit_marks(self.subject, "88.5").marks, 88.5)

    def test_marks_empty_unsets(self):
        self.assertIsNone(edit_marks(self.subject, "").marks)
        self.assertIsNone(edit_marks(self.subject, "   ").marks)

    def test_marks_out_of_range_rejected(self):
        for raw in ("101", "-1", "100.01", "abc", "nan"):
            edited = edit_marks(self.subject, raw)
            self.assertIs(edited, self.subject, raw)

    def test_rejected_edit_is_idempotent(self):
        once = edit_marks(self.subject, "150")
        twice = edit_marks(once, "150")
        self.assertEqual(twice, self.subject)

    def test_credits_negative_rejected(self):
        self.assertIs(edit_credits(self.subject, "-2"), self.subject)

    def test_credits_empty_rejected(self):
        self.assertIs(edit_credits(self.subject, ""), self.subject)

    def test_credits_accepts_zero_and_fractions(self):
        self.assertEqual(edit_credits(self.subject, "0").credits, 0)
        self.assertEqual(edit_credits(self.subject, "1.5").credits, 1.5)

    def test_name_kept_verbatim(self):
        self.assertEqual(edit_name(self.subject, "  Data Structures ").name, "  Data Structures ")
        self.assertEqual(edit_name(self.subject, "").name, "")

    def test_edits_keep_id(self):
        self.assertEqual(edit_marks(self.subject, "40").id, "s1")
        self.assertEqual(edit_credits(self.subject, "2").id, "s1")

    def test_clear_keeps_credits(self):
        cleared = clear_subject(self.subject)
        self.assertEqual(cleared, Subject(id="s1", name="", credits=3, marks=None))


if __name__ == "__main__":
    unittest.main()
