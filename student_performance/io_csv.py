from typing import Dict

import pandas as pd

from student_performance.scoring import Report
from student_performance.subjects import SUBJECT_FIELDS, field_name

# ------------------------
# CSV helpers (UI-side)
# ------------------------

def _normalise_cols(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df.columns = [str(c).strip().lower() for c in df.columns]
    # allow singular "mark"
    if "mark" in df.columns and "marks" not in df.columns:
        df = df.rename(columns={"mark": "marks"})
    return df


def read_csv_upload(uploaded_file) -> pd.DataFrame:
    df = pd.read_csv(uploaded_file, dtype=str, keep_default_na=False)
    return _normalise_cols(df)


def validate_marks_csv(df: pd.DataFrame) -> pd.DataFrame:
    required = {"subject", "marks"}
    missing = required - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns: {sorted(missing)}. Expected: Subject, Marks.")
    out = df[["subject", "marks"]].copy()
    out = out.rename(columns={"subject": "Subject", "marks": "Marks"})
    return out


def parse_uploaded_marks(df: pd.DataFrame) -> Dict[str, str]:
    """
    Form field -> raw mark text. Unknown subjects and blank rows are skipped;
    the values stay as text so the form does its own range checks.
    """
    values = {}
    for _, row in df.iterrows():
        subject = row.get("Subject")
        mark = row.get("Marks")
        if pd.isna(subject) or pd.isna(mark):
            continue
        name = field_name(str(subject))
        mark = str(mark).strip()
        if name not in SUBJECT_FIELDS or not mark:
            continue
        values[name] = mark
    return values


def report_frame(report: Report) -> pd.DataFrame:
    weights = report.tier.weights
    rows = [
        {
            "Subject": subject,
            "Mark": mark,
            "Weight": weights[subject],
            "Contribution": mark * weights[subject],
        }
        for subject, mark in report.breakdown
    ]
    return pd.DataFrame(rows, columns=["Subject", "Mark", "Weight", "Contribution"])


def report_csv(report: Report) -> bytes:
    return report_frame(report).to_csv(index=False).encode("utf-8")


def upload_key(uploaded_file) -> str:
    """Identity of one upload; re-uploading a file with the same name gets a new key."""
    return uploaded_file.file_id
