"""
Ghostscript argument builder.

The argument order matters to Ghostscript: device and output file come
after the page setup, and the input document is always last.
"""

from .options import ColorMode, DuplexEdge, PaperSize, PrintOptions

BASE_FLAGS = (
    "-dPrinted",
    "-dBATCH",
    "-dNOPAUSE",
    "-dNOSAFER",
    "-q",
)

PAPER_SIZES = {
    PaperSize.A4: "a4",
    PaperSize.LETTER: "letter",
    PaperSize.LEGAL: "legal",
    PaperSize.A5: "a5",
}
DEFAULT_PAPER_SIZE = "a4"

GRAYSCALE_FLAGS = (
    "-sProcessColorModel=DeviceGray",
    "-sColorConversionStrategy=Gray",
    "-dOverrideICC",
)

OUTPUT_DEVICE = "-sDEVICE=mswinpr2"


def paper_size_arg(paper_size) -> str:
    # Unrecognized sizes print on A4 rather than failing the job
    return f"-sPAPERSIZE={PAPER_SIZES.get(paper_size, DEFAULT_PAPER_SIZE)}"


def build_args(printer_name: str, document_path: str, options: PrintOptions) -> list[str]:
    """
    Build the Ghostscript argument list for printing a document.

    Args:
        printer_name: Windows printer name, sent through the %printer% output
        document_path: Absolute path of the document
        options: Page setup

    Returns:
        Ordered argument list, executable not included
    """
    args = list(BASE_FLAGS)

    args.append(f"-dNumCopies={options.copies}")
    args.append(paper_size_arg(options.paper_size))

    if options.color == ColorMode.MONOCHROME:
        args.extend(GRAYSCALE_FLAGS)

    if options.duplex:
        args.append("-dDuplex=true")
        tumble = options.duplex_edge == DuplexEdge.SHORT_EDGE
        args.append(f"-dTumble={'true' if tumble else 'false'}")
    else:
        args.append("-dDuplex=false")

    args.append(OUTPUT_DEVICE)
    args.append(f"-sOutputFile=%printer%{printer_name}")
    args.append(document_path)

    return args
