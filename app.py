import streamlit as st

from student_performance.form import FormController
from student_performance.io_csv import *
from student_performance.logging_config import setup_logging
from student_performance.settings import settings
from student_performance.subjects import ALL_SUBJECTS, field_name, visible_fields

setup_logging()

# ------------------------
# Streamlit UI (with optional CSV upload)
# ------------------------

st.set_page_config(
    page_title=settings.page_title,
    page_icon="🎓",
    layout=settings.layout,
)

st.title(f"🎓 {settings.page_title}")
st.write(
    "Enter the student's grade level, subject marks and attendance to get a "
    "weighted average, a letter grade and a predicted performance rank."
)

if "controller" not in st.session_state:
    st.session_state["controller"] = FormController()
controller = st.session_state["controller"]


def _widget_key(name: str) -> str:
    return f"field_{name}"


def _on_edit(name: str) -> None:
    st.session_state["controller"].update(name, st.session_state[_widget_key(name)])


def _on_submit() -> None:
    st.session_state["controller"].submit()


def input_field(label: str, name: str) -> None:
    key = _widget_key(name)
    # Hidden widgets lose their state; refill from the form record when shown again
    if key not in st.session_state:
        st.session_state[key] = controller.input.get(name) or ""
    st.text_input(label, key=key, on_change=_on_edit, args=(name,))


# ------------------------
# Optional marks upload
# ------------------------

marks_csv = st.file_uploader(
    "Optionally upload marks CSV (Subject, Marks)",
    type=["csv"],
    key="marks_csv",
)

if marks_csv is not None:
    upload_id = upload_key(marks_csv)
    if st.session_state.get("applied_upload") != upload_id:
        try:
            uploaded = parse_uploaded_marks(validate_marks_csv(read_csv_upload(marks_csv)))
        except ValueError as e:
            st.error(f"Marks CSV error: {e}")
        else:
            for name, value in uploaded.items():
                controller.update(name, value)
                st.session_state[_widget_key(name)] = value
            st.session_state["applied_upload"] = upload_id


# ------------------------
# Input form
# ------------------------

st.subheader("1. Student details")
input_field("Grade (1-12):", "grade")

st.subheader("2. Subject marks")
shown = visible_fields(controller.input.grade)
for subject in ALL_SUBJECTS:
    name = field_name(subject)
    if name in shown:
        input_field(f"{subject}:", name)

st.subheader("3. Attendance")
input_field("Attendance (%):", "attendance")

st.button(
    "Generating..." if controller.in_progress else "Generate Report",
    type="primary",
    disabled=controller.in_progress,
    on_click=_on_submit,
)

if controller.error_message:
    st.error(controller.error_message)


# ------------------------
# Show report if we have it
# ------------------------

if controller.report is not None:
    report = controller.report

    st.markdown("---")
    st.subheader("Student Performance Report")

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Grade Level", report.grade_level)
    with col2:
        st.metric("Weighted Average Marks", f"{report.weighted_average:.2f}")
    with col3:
        st.metric("Grade", report.letter_grade)
    with col4:
        st.metric("Attendance", f"{report.attendance:.2f}%")

    st.markdown(f"**Rank:** {report.rank}")
    st.markdown(f"**Performance:** {report.performance}")

    st.markdown("### Subject-wise Breakdown")
    st.markdown("\n".join(f"- {line}" for line in report.breakdown_lines()))

    st.dataframe(
        report_frame(report),
        hide_index=True,
        column_config={
            "Mark": st.column_config.NumberColumn("Mark", format="%.2f"),
            "Weight": st.column_config.NumberColumn("Weight", format="%.2f"),
            "Contribution": st.column_config.NumberColumn("Contribution", format="%.2f"),
        },
    )

    st.download_button(
        "Download report (CSV)",
        data=report_csv(report),
        file_name=f"performance_report_grade_{report.grade_level}.csv",
        mime="text/csv",
    )
else:
    st.info("Fill in the form and click **Generate Report** to get started.")


if settings.show_faq:
    st.header("FAQ")

    st.subheader("How is the weighted average calculated?")
    st.write(
        "Each subject mark is multiplied by its weight and the results are added up, "
        "then divided by the total of the weights. Grades 9-12 use nine subjects "
        "(Maths and English 15%, the rest 10% each); grades 1-8 use five subjects "
        "(Maths, Social and Science 25% each, English 15%, Tamil 10%)."
    )

    st.subheader("How are the letter grade and rank decided?")
    st.write(
        "The letter grade comes from the weighted average: 90+ is A+, 80+ is A, 70+ is B, "
        "60+ is C, 50+ is D, anything lower is F. The rank uses the weighted average "
        "scaled by attendance, so 80 marks at 90% attendance ranks as 72."
    )

    st.subheader("What format should the marks CSV use?")
    st.write(
        "Two columns, **Subject** and **Marks**, one row per subject. Subjects not used "
        "for the entered grade are ignored when the report is generated."
    )

    st.subheader("What data do you collect or store?")
    st.write(
        "This tool does **not** store, save, or transmit your data. "
        "Everything you enter is processed **locally in your browser session** "
        "and is cleared when you refresh or close the page."
    )

# To run:
# streamlit run app.py
