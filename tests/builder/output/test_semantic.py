"""
Tests for builder.output.semantic
"""

from PIL import Image

from report_toolkit.builder.output import render_semantic_document, write_semantic_document
from report_toolkit.core.models import Letterhead


def test_title_falls_back_to_file_name():
    doc = render_semantic_document("<p>Scores</p>", file_name="term_2_report")

    assert "<h1>term 2 report</h1>" in doc
    assert "<p>Scores</p>" in doc
    assert "direction: ltr" in doc


def test_title_is_escaped():
    doc = render_semantic_document("", file_name="r", letterhead=Letterhead(title="Grades <A&B>"))

    assert "<h1>Grades &lt;A&amp;B&gt;</h1>" in doc


def test_rtl_title_switches_document_direction():
    doc = render_semantic_document("", file_name="r", letterhead=Letterhead(title="تقرير الأداء"))

    assert "<body dir='rtl'>" in doc
    assert "direction: rtl" in doc
    assert "text-align: right" in doc


def test_logo_embedded_as_data_uri():
    doc = render_semantic_document(
        "", file_name="r", letterhead=Letterhead(logo=Image.new("RGB", (8, 8), "red"))
    )

    assert 'src="data:image/png;base64,' in doc


def test_write_forces_doc_suffix_and_bom(tmp_path):
    # Act
    path = write_semantic_document("<p>x</p>", tmp_path / "exports" / "Report", file_name="Report")

    # Assert
    assert path.suffix == ".doc"
    raw = path.read_bytes()
    assert raw.startswith(b"\xef\xbb\xbf")
    assert "<p>x</p>" in raw.decode("utf-8-sig")


def test_write_appends_suffix_to_dotted_name(tmp_path):
    """A dot inside the base name is part of the name, not an extension."""
    path = write_semantic_document("", tmp_path / "Term.2 Report", file_name="Term.2 Report")

    assert path == tmp_path / "Term.2 Report.doc"
    assert path.exists()


def test_write_keeps_existing_doc_suffix(tmp_path):
    path = write_semantic_document("", tmp_path / "Report.doc", file_name="Report")

    assert path == tmp_path / "Report.doc"
