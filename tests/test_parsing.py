import sys
import unittest
from io import BytesIO
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from docx import Document  # noqa: E402

from resume_optimizer.parsing.parse import (  # noqa: E402
    UnsupportedDocumentError,
    extract_document_text,
    source_type_for,
)


class DocumentExtractionTests(unittest.TestCase):
    def test_txt_returns_stable_document(self):
        content = "Line one\n- Bullet item\nLine three"
        first = extract_document_text("resume.txt", content.encode("utf-8"))
        second = extract_document_text("resume.txt", content.encode("utf-8"))

        self.assertEqual(first.source_type, "txt")
        self.assertEqual(first.text, content)
        self.assertEqual(first.parsing_warnings, [])
        self.assertTrue(first.doc_id)
        self.assertEqual(first.doc_id, second.doc_id)

    def test_source_type_by_extension(self):
        self.assertEqual(source_type_for("CV.PDF"), "pdf")
        self.assertEqual(source_type_for("cv.docx"), "docx")
        self.assertEqual(source_type_for("notes.md"), "txt")
        with self.assertRaises(UnsupportedDocumentError):
            source_type_for("setup.exe")
        with self.assertRaises(UnsupportedDocumentError):
            extract_document_text("resume", b"no extension")

    def test_docx_paragraphs_and_tables(self):
        document = Document()
        document.add_paragraph("Jane Doe")
        document.add_paragraph("Experience")
        table = document.add_table(rows=1, cols=2)
        table.rows[0].cells[0].text = "Python"
        table.rows[0].cells[1].text = "AWS"
        buffer = BytesIO()
        document.save(buffer)

        extracted = extract_document_text("resume.docx", buffer.getvalue())

        self.assertEqual(extracted.source_type, "docx")
        self.assertEqual(extracted.text, "Jane Doe\nExperience\nPython | AWS")
        self.assertEqual(extracted.parsing_warnings, [])

    def test_unreadable_pdf_becomes_warning(self):
        extracted = extract_document_text("resume.pdf", b"this is not a pdf")

        self.assertEqual(extracted.text, "")
        self.assertEqual(extracted.source_type, "pdf")
        self.assertEqual(len(extracted.parsing_warnings), 1)
        self.assertIn("PDF parsing failed", extracted.parsing_warnings[0])

    def test_non_utf8_text_is_replaced_with_warning(self):
        extracted = extract_document_text("resume.txt", b"Caf\xe9 manager")

        self.assertIn("manager", extracted.text)
        self.assertTrue(any("UTF-8" in warning for warning in extracted.parsing_warnings))

    def test_empty_text_file_warns(self):
        extracted = extract_document_text("resume.txt", b"   ")
        self.assertIn("Text file is empty.", extracted.parsing_warnings)


if __name__ == "__main__":
    unittest.main()
