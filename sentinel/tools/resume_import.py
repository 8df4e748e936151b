"""
Resume import.

Extracts source text from uploaded plain-text or PDF resumes using pypdf.
"""

from io import BytesIO

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from sentinel.errors import ValidationError

TEXT_SUFFIXES = (".txt", ".md")


def parse_pdf(pdf_content: bytes) -> str:
    """
    Extract text from a PDF file.

    Args:
        pdf_content: Raw bytes of the PDF file

    Returns:
        Extracted text content from all pages
    """
    try:
        reader = PdfReader(BytesIO(pdf_content))
    except PdfReadError as e:
        raise ValidationError(f"Failed to parse PDF: {e}") from e

    text_parts = []
    for page in reader.pages:
        page_text = page.extract_text()
        if page_text:
            text_parts.append(page_text)

    return "\n\n".join(text_parts)


def read_resume_upload(filename: str, content: bytes) -> str:
    """
    Turn an uploaded resume into source text.

    Raises:
        ValidationError: Unsupported file type, undecodable or empty content
    """
    name = (filename or "").lower()
    if name.endswith(".pdf"):
        text = parse_pdf(content)
    elif name.endswith(TEXT_SUFFIXES):
        try:
            text = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ValidationError("Text resume must be UTF-8 encoded") from e
    else:
        raise ValidationError("Only .txt, .md and .pdf resumes are supported")

    if not text.strip():
        raise ValidationError("Resume appears to be empty or unreadable")
    return text


def read_resume_file(path: str) -> str:
    """Read a resume from disk (CLI)."""
    with open(path, "rb") as f:
        return read_resume_upload(path, f.read())
