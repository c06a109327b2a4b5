from .extractor import extract_text_from_pdf


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Extract plain text from a resume PDF")
    parser.add_argument("pdf_path", help="Path to resume PDF")
    parser.add_argument("--out", default=None, help="Write text to this file instead of stdout")
    args = parser.parse_args()

    text = extract_text_from_pdf(args.pdf_path)

    if args.out:
        with open(args.out, "w", encoding="utf-8") as f:
            f.write(text)
        print(f"Extracted {len(text)} characters to: {args.out}")
    else:
        print(text)
