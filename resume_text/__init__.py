from .extractor import PDF_MAGIC, extract_text_from_pdf, looks_like_pdf, normalize_text

__all__ = ["PDF_MAGIC", "extract_text_from_pdf", "looks_like_pdf", "normalize_text"]
