"""
Render the sample tables to PDF plus PNG layout previews.

Each sample goes into its own PDF; the preview of the sample's first
page is written next to it so the layout boxes can be compared with the
rendered output.

Usage:
    python scripts/generate_sample_tables.py --out output/samples
    python scripts/generate_sample_tables.py --only spanning rotation --debug
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Dict, List

# Add src to path
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root / "src"))

from pdftable import Table  # noqa: E402
from pdftable.document import PageConfig, ReportLabDocument  # noqa: E402
from pdftable.output import save_debug_preview  # noqa: E402

logger = logging.getLogger("samples")

LOREM = (
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do eiusmod "
    "tempor incididunt ut labore et dolore magna aliqua."
)

Sample = Callable[[ReportLabDocument, bool], List[Table]]


def sample_simple(doc: ReportLabDocument, debug: bool) -> List[Table]:
    table = Table(doc, cols=3, debug=debug)
    table.row([{"value": "Name", "type": "TH"}, {"value": "Qty", "type": "TH"}, {"value": "Done", "type": "TH"}])
    table.row(["Apples", 3, True])
    table.row(["Pears", 12, False])
    table.row(["A much longer description that wraps onto several lines", 1, True])
    table.end()
    return [table]


def sample_fonts(doc: ReportLabDocument, debug: bool) -> List[Table]:
    table = Table(doc, cols=2, debug=debug, default_cell={"padding": "0.5em"})
    table.row([{"value": "Helvetica 8", "font_size": 8}, {"value": "Times 16", "font": "Times-Roman", "font_size": 16}])
    table.row([{"value": "Courier 12", "font": "Courier"}, {"value": "Bold 24", "font": "Helvetica-Bold", "font_size": 24}])
    table.row(["Padding follows each cell's own em", {"value": "1em padding", "padding": "1em", "font_size": 18}])
    table.end()
    return [table]


def sample_spanning(doc: ReportLabDocument, debug: bool) -> List[Table]:
    table = Table(doc, cols=4, debug=debug, border=2)
    table.row([{"value": "2x2 span", "col_span": 2, "row_span": 2, "align": "center"}, "C", "D"])
    table.row(["G", "H"])
    table.row([{"value": "Three rows", "row_span": 3}, {"value": LOREM, "col_span": 3}])
    table.row(["x", "y", "z"])
    table.row([{"value": "wide", "col_span": 2}, "end"])
    table.end()
    return [table]


def sample_colouring(doc: ReportLabDocument, debug: bool) -> List[Table]:
    table = Table(
        doc,
        cols=3,
        debug=debug,
        row_styles=lambda index: {"cell": {"background_color": "#eeeeee" if index % 2 else "white"}},
    )
    table.row(
        ["Header", "Header", "Header"],
        default_cell={"type": "TH", "background_color": "navy", "text_color": "white"},
    )
    table.row([
        {"value": "red border", "border_color": "red", "border": 2},
        {"value": "outlined text", "text_stroke": 0.5, "text_stroke_color": "blue", "text_color": "yellow", "font_size": 20},
        {"value": "green", "text_color": "green"},
    ])
    table.row(["plain", {"value": "mixed sides", "border_color": ["red", "blue", "green", "orange"], "border": [1, 2, 3, 4]}, "plain"])
    table.end()
    return [table]


def sample_skip_borders(doc: ReportLabDocument, debug: bool) -> List[Table]:
    table = Table(doc, cols=3, debug=debug, default_cell={"border": 0})
    table.row([{"value": "Header", "border": {"top": 0, "right": 0, "bottom": 2, "left": 0}} for _ in range(3)])
    table.row(["no", "borders", "here"])
    table.row([{"value": "only left", "border": [0, 0, 0, 1]}, {"value": "vertical", "border": [0, 1]}, "none"])
    table.end()
    return [table]


def sample_rotation(doc: ReportLabDocument, debug: bool) -> List[Table]:
    table = Table(doc, cols=4, debug=debug, cell_height=120)
    table.row([
        {"value": f"Rotated {angle} degrees", "rotation": angle, "align": "center"}
        for angle in (0, 30, 90, 135)
    ])
    table.row([{"value": LOREM, "rotation": angle} for angle in (15, 45, 270, 180)])
    table.end()
    return [table]


def sample_star_columns(doc: ReportLabDocument, debug: bool) -> List[Table]:
    tables = []
    for columns in ([100, "*", "*"], ["*", {"width": "*", "min_width": 200}, "*"], ["25%", "*", {"width": "*", "max_width": 60}]):
        table = Table(doc, debug=debug, column_styles=columns, border=1)
        table.row([str(column) for column in columns])
        table.end()
        doc.move_to(doc.x, doc.y + 20)
        tables.append(table)
    return tables


def sample_pagination(doc: ReportLabDocument, debug: bool) -> List[Table]:
    table = Table(doc, cols=3, debug=debug, border=2)
    table.row(["#", "Text", "Span"], default_cell={"type": "TH"})
    for index in range(1, 40):
        cells = [str(index), LOREM[: (index * 7) % len(LOREM) + 1]]
        if index % 5 == 1:
            cells.append({"value": f"rows {index}-{index + 4}", "row_span": 5})
        table.row(cells)
    table.end()
    return [table]


SAMPLES: Dict[str, Sample] = {
    "simple": sample_simple,
    "fonts": sample_fonts,
    "spanning": sample_spanning,
    "colouring": sample_colouring,
    "skip_borders": sample_skip_borders,
    "rotation": sample_rotation,
    "star_columns": sample_star_columns,
    "pagination": sample_pagination,
}


def render_sample(name: str, output_dir: Path, debug: bool, scale: float) -> None:
    """Render one sample to PDF and preview its first page."""
    pdf_path = output_dir / f"{name}.pdf"
    doc = ReportLabDocument(pdf_path, PageConfig())
    tables = SAMPLES[name](doc, debug)
    doc.save()

    rows = [row for table in tables for row in table.rows]
    save_debug_preview(rows, doc.config.page_size, output_dir / f"{name}.png", scale)

    warnings = sum(len(table.warnings) for table in tables)
    logger.info(f"{name}: {len(rows)} rows, {doc.page_count} pages, {warnings} warnings")


def main() -> int:
    parser = argparse.ArgumentParser(description="Render sample tables to PDF and PNG previews")
    parser.add_argument("--out", type=Path, default=project_root / "output" / "samples", help="Output directory")
    parser.add_argument("--only", nargs="+", choices=sorted(SAMPLES), help="Render only these samples")
    parser.add_argument("--debug", action="store_true", help="Draw debug outlines in the PDFs")
    parser.add_argument("--scale", type=float, default=1.5, help="Preview pixels per point")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log per-row decisions")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    for name in args.only or SAMPLES:
        render_sample(name, args.out, args.debug, args.scale)

    logger.info(f"Samples written to {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
