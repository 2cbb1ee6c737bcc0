import unittest

from gradecalc.core.grades import GRADE_BANDS, classify


class GradingTests(unittest.TestCase):
    def test_grade_bands(self):
        self.assertEqual(classify(95).letter, "O")
        self.assertEqual(classify(84).letter, "A+")
        self.assertEqual(classify(72).letter, "A")
        self.assertEqual(classify(65).letter, "B+")
        self.assertEqual(classify(55).letter, "B")
        self.assertEqual(classify(20).letter, "F")

    def test_boundaries(self):
        cases = {
            89: ("A+", 9),
            90: ("O", 10),
            34: ("F", 0),
            35: ("P", 4),
            39: ("P", 4),
            40: ("C", 5),
            0: ("F", 0),
            100: ("O", 10),
        }
        for marks, (letter, points) in cases.items():
            grade = classify(marks)
            self.assertEqual((grade.letter, grade.points), (letter, points), marks)

    def test_fractional_marks_use_lower_band(self):
        self.assertEqual(classify(89.5).letter, "A+")
        self.assertEqual(classify(34.99).letter, "F")

    def test_points_never_decrease(self):
        letters = {letter for _, letter, _ in GRADE_BANDS}
        previous = -1
        for tenth in range(0, 1001):
            grade = classify(tenth / 10)
            self.assertIn(grade.letter, letters)
            self.assertGreaterEqual(grade.points, previous)
            previous = grade.points

    def test_out_of_range_raises(self):
        with self.assertRaises(ValueError):
            classify(-1)
        with self.assertRaises(ValueError):
            classify(100.5)
        with self.assertRaises(ValueError):
            classify(float("nan"))


if __name__ == "__main__":
    unittest.main()
