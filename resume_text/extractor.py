import io
import re
from typing import BinaryIO, List, Union

import pdfplumber

PDF_MAGIC = b"%PDF"

# ---------------------------
# Text extraction + normalization
# ---------------------------
def normalize_text(text: str) -> str:
    text = text.replace("\r", "\n")
    text = re.sub(r"\n{3,}", "\n\n", text)
    text = re.sub(r"[ \t]{2,}", " ", text)
    # fix hyphenated line breaks: "engi-\nneer" -> "engineer"
    text = re.sub(r"(\w)-\n(\w)", r"\1\2", text)
    return text.strip()


def looks_like_pdf(data: bytes) -> bool:
    return bool(data) and data[:4] == PDF_MAGIC


def extract_text_from_pdf(source: Union[str, bytes, BinaryIO]) -> str:
    """Text of every page joined by newlines. `source` is a path, raw bytes or a binary file object."""
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)

    pages: List[str] = []
    with pdfplumber.open(source) as pdf:
        for page in pdf.pages:
            pages.append(page.extract_text() or "")

    return normalize_text("\n".join(pages))
