#!/usr/bin/env python3
"""
Generate a one-page test PDF for trying out printing.

Writes a minimal, valid PDF by hand so no PDF library is needed.

Usage:
    python scripts/generate_test_document.py                    # test.pdf, A4
    python scripts/generate_test_document.py --text "Hello"     # Custom text
    python scripts/generate_test_document.py --paper letter     # Letter size
    python scripts/generate_test_document.py --output my.pdf    # Custom filename
"""

import argparse
from pathlib import Path

# Page sizes in PostScript points
PAGE_SIZES = {
    "a4": (595, 842),
    "letter": (612, 792),
    "legal": (612, 1008),
    "a5": (420, 595),
}


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(text: str, width: int, height: int) -> bytes:
    """Assemble a one-page PDF with centered-ish Helvetica text and a border."""
    content = (
        f"2 w 20 20 {width - 40} {height - 40} re S\n"
        f"BT /F1 36 Tf 60 {height // 2} Td ({_escape(text)}) Tj ET\n"
    ).encode("latin-1", errors="replace")

    objects = [
        b"<</Type/Catalog/Pages 2 0 R>>",
        b"<</Type/Pages/Kids[3 0 R]/Count 1>>",
        (
            f"<</Type/Page/Parent 2 0 R/MediaBox[0 0 {width} {height}]"
            f"/Contents 4 0 R/Resources<</Font<</F1 5 0 R>>>>>>"
        ).encode(),
        b"<</Length " + str(len(content)).encode() + b">>\nstream\n" + content + b"endstream",
        b"<</Type/Font/Subtype/Type1/BaseFont/Helvetica>>",
    ]

    pdf = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(pdf))
        pdf += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"

    xref_offset = len(pdf)
    pdf += f"xref\n0 {len(objects) + 1}\n".encode()
    pdf += b"0000000000 65535 f \n"
    for offset in offsets:
        pdf += f"{offset:010d} 00000 n \n".encode()
    pdf += f"trailer\n<</Size {len(objects) + 1}/Root 1 0 R>>\n".encode()
    pdf += f"startxref\n{xref_offset}\n%%EOF\n".encode()

    return bytes(pdf)


def create_test_document(
    text: str = "TEST PAGE",
    paper: str = "a4",
    output: str = "test.pdf"
) -> Path:
    """Create a test document."""
    width, height = PAGE_SIZES[paper]

    output_path = Path(output)
    output_path.write_bytes(build_pdf(text, width, height))

    print(f"Created: {output_path}")
    print(f"  Paper: {paper} ({width}x{height} pt)")
    print(f"  Text: {text}")

    return output_path


def main():
    parser = argparse.ArgumentParser(description="Generate a test PDF document")
    parser.add_argument("--text", default="TEST PAGE", help="Page text")
    parser.add_argument("--paper", default="a4", choices=sorted(PAGE_SIZES), help="Paper size")
    parser.add_argument("--output", "-o", default="test.pdf", help="Output filename")

    args = parser.parse_args()

    create_test_document(args.text, args.paper, args.output)


if __name__ == "__main__":
    main()
