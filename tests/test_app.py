import unittest
from pathlib import Path

from streamlit.testing.v1 import AppTest

APP_PATH = str(Path(__file__).resolve().parent.parent / "app.py")


class AppPageTests(unittest.TestCase):
    def setUp(self):
        self.at = AppTest.from_file(APP_PATH, default_timeout=30)
        self.at.run()

    def fill(self, **values):
        for name, value in values.items():
            self.at.text_input(key=f"field_{name}").input(value)
        self.at.run()

    def shown_fields(self):
        return [w.key for w in self.at.text_input]

    def test_initial_page(self):
        self.assertFalse(self.at.exception)
        self.assertIn("field_social", self.shown_fields())
        self.assertNotIn("field_biology", self.shown_fields())
        self.assertEqual(self.at.button[0].label, "Generate Report")
        self.assertEqual(len(self.at.error), 0)

    def test_high_grade_fields(self):
        self.fill(grade="10")
        shown = self.shown_fields()
        self.assertIn("field_biology", shown)
        self.assertIn("field_economics", shown)
        self.assertNotIn("field_science", shown)

    def test_generate_report(self):
        self.fill(grade="5")
        self.fill(maths="80", social="70", science="90", english="60", tamil="100", attendance="90")
        self.at.button[0].click().run()

        self.assertFalse(self.at.exception)
        self.assertEqual(len(self.at.error), 0)
        self.assertEqual(self.at.metric[1].value, "79.00")
        self.assertEqual(self.at.metric[2].value, "B")
        text = [m.value for m in self.at.markdown]
        self.assertIn("**Rank:** Top 50%", text)
        self.assertIn("**Performance:** Good", text)

    def test_grade_error(self):
        self.fill(grade="13", attendance="90")
        self.at.button[0].click().run()
        self.assertEqual(self.at.error[0].value, "Please enter a valid grade between 1 and 12.")
        self.assertEqual(len(self.at.metric), 0)


if __name__ == "__main__":
    unittest.main()
