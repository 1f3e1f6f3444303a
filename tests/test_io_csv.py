import io
import unittest
from types import SimpleNamespace

from student_performance.io_csv import (
    parse_uploaded_marks,
    read_csv_upload,
    report_csv,
    report_frame,
    upload_key,
    validate_marks_csv,
)
from student_performance.scoring import score_student


def upload(text):
    return read_csv_upload(io.StringIO(text))


class MarksUploadTests(unittest.TestCase):
    def test_columns_normalised(self):
        df = upload(" Subject ,Mark\nMaths,80\n")
        self.assertEqual(list(df.columns), ["subject", "marks"])

    def test_missing_columns(self):
        with self.assertRaises(ValueError) as ctx:
            validate_marks_csv(upload("Subject,Score\nMaths,80\n"))
        self.assertIn("marks", str(ctx.exception))

    def test_parse_marks(self):
        df = validate_marks_csv(
            upload("Subject,Marks\nmaths,80\n ENGLISH ,72.5\nArt,90\nTamil,\nScience,150\n")
        )
        self.assertEqual(
            parse_uploaded_marks(df),
            {"maths": "80", "english": "72.5", "science": "150"},
        )

    def test_same_name_reupload_gets_new_key(self):
        first = SimpleNamespace(file_id="a1", name="marks.csv", size=42)
        second = SimpleNamespace(file_id="b2", name="marks.csv", size=42)
        self.assertNotEqual(upload_key(first), upload_key(second))
        self.assertEqual(upload_key(first), "a1")


class ReportExportTests(unittest.TestCase):
    def setUp(self):
        marks = {"Maths": 80, "Social": 70, "Science": 90, "English": 60, "Tamil": 100}
        self.report = score_student(5, marks, 90)

    def test_report_frame(self):
        df = report_frame(self.report)
        self.assertEqual(list(df.columns), ["Subject", "Mark", "Weight", "Contribution"])
        self.assertEqual(list(df["Subject"]), ["Maths", "Social", "Science", "English", "Tamil"])
        self.assertAlmostEqual(df["Contribution"].sum(), 79.0, places=6)
        self.assertAlmostEqual(df.loc[df["Subject"] == "English", "Contribution"].iloc[0], 9.0)

    def test_report_csv(self):
        data = report_csv(self.report)
        self.assertIsInstance(data, bytes)
        lines = data.decode("utf-8").splitlines()
        self.assertEqual(lines[0], "Subject,Mark,Weight,Contribution")
        self.assertEqual(len(lines), 6)
        self.assertTrue(lines[1].startswith("Maths,80.0,0.25,20.0"))


if __name__ == "__main__":
    unittest.main()
