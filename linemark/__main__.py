"""linemark CLI entry point.

Allows running via `python -m linemark` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from importlib.metadata import PackageNotFoundError, version

from .average_time import AverageTimeLine
from .console import ConsoleSink
from .enums import TextFieldType
from .errors import TextLayoutError
from .fields import AdHocField, FieldContent, NumberContent
from .formatter_collection import FieldFormatParams, FormatterCollection, LineFormatParams
from .lines import StandardLine
from .page_config import PAGE_CONFIGS, get_page_config
from .page_formatter import PageFormatter
from .pdf_generator import PDFGenerator
from .settings_persistence import get_persistence
from .title_marquee import TitleMarquee

logger = logging.getLogger(__name__)

USAGE = """usage: linemark --version
       linemark demo [--pdf FILE] [--page NAME] [--profile NAME]
                     [--save-profile NAME] [--width N] [--verbose]"""

NOTE = ("Each table row is queued as content only and formatted when the queue is "
        "flushed, using the standard parameters registered for its column count. "
        "Loading a different profile restyles the whole table, and this paragraph "
        "wraps between words at the console width.")


def get_version_string() -> str:
    try:
        return f"linemark {version('linemark')}"
    except PackageNotFoundError:
        return "linemark (not installed)"


def default_std_params(formatter: FormatterCollection, width: int) -> None:
    """Register the standard parameters the demo document uses."""
    formatter.set_std_params_line_1col(max_line_length=width, auto_wrap=True)
    formatter.set_std_params_multi_col(
        [
            FieldFormatParams(left_margin="  ", field_length=14),
            FieldFormatParams(left_margin=" ", field_length=10, justify="Right"),
            FieldFormatParams(left_margin=" ", field_length=12, justify="Right"),
        ],
        max_line_length=width, auto_wrap=True)


def build_demo(formatter: FormatterCollection, width: int) -> str:
    """Queue and render the demonstration document."""
    start = datetime.now(timezone.utc)

    marquee = TitleMarquee(
        ["linemark", "Line Composition Demonstration"],
        field_length=min(width, 60),
        leading_blank_lines=1,
        top_title_blank_lines=1,
        bottom_title_blank_lines=1,
        trailing_blank_lines=1)
    formatter.enqueue("TitleMarquee", marquee)

    formatter.add_label("Inventory", field_length=min(width, 40), justify="Center")
    formatter.add_solid_line("-", min(width, 40))
    formatter.add_line_columns(["Item", "Count", "Unit Price"])
    for item, count, price in (("Widgets", 1200, 3.5), ("Gadgets", 75, 12.25),
                               ("Sprockets", 30500, 0.07)):
        formatter.add_line_columns(
            [item, NumberContent(count, ","), NumberContent(price, ",.2f")])
    formatter.add_blank_lines(1)
    formatter.add_line_1col(FieldContent.of("Rows above are formatted at flush time."))
    words = StandardLine([AdHocField(word + " ") for word in NOTE.split()])
    formatter.enqueue(TextFieldType.AD_HOC_TEXT, words,
                      LineFormatParams(TextFieldType.AD_HOC_TEXT, max_line_length=width,
                                       auto_wrap=True))
    formatter.add_blank_lines(1)
    formatter.add_date_time(start, "%A %d %B %Y %H:%M:%S %Z", left_margin="Generated: ")

    text = formatter.build_text()
    end = datetime.now(timezone.utc)
    flushes = AverageTimeLine(abbreviated=True)
    flushes.add_start_stop_event(start, end)

    formatter.add_blank_lines(1)
    formatter.add_timer_lines(start, end)
    text += formatter.build_text()
    flushes.add_start_stop_event(end, datetime.now(timezone.utc))

    formatter.add_blank_lines(1)
    formatter.add_average_time(flushes)
    return text + formatter.build_text()


def write_pdf(text: str, path: str, page_name: str) -> None:
    page_config = get_page_config(page_name)
    paginator = PageFormatter(text, page_config)
    pages = paginator.format_pages()
    generator = PDFGenerator(page_config)
    data = generator.generate_pdf(pages, title="linemark demo")
    with open(path, "wb") as f:
        f.write(data)
    logger.info(f"Wrote {paginator.get_page_count()} page(s) to {path}")
    warning = generator.get_unprintable_warning()
    if warning:
        print(warning, file=sys.stderr)


def run_demo(args: list[str]) -> int:
    options = {"pdf": None, "page": "pica", "profile": None, "save_profile": None,
               "width": None}
    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ("--verbose", "-v"):
            logging.basicConfig(level=logging.DEBUG,
                                format="%(levelname)s %(name)s: %(message)s")
            i += 1
            continue
        key = {"--pdf": "pdf", "--page": "page", "--profile": "profile",
               "--save-profile": "save_profile", "--width": "width"}.get(arg)
        if key is None or i + 1 >= len(args):
            print(USAGE, file=sys.stderr)
            return 2
        options[key] = args[i + 1]
        i += 2

    if options["page"] not in PAGE_CONFIGS:
        print(f"Unknown page layout: {options['page']} "
              f"(choose from {', '.join(PAGE_CONFIGS)})", file=sys.stderr)
        return 2

    width = None
    if options["width"] is not None:
        try:
            width = int(options["width"])
        except ValueError:
            print(f"Invalid width: {options['width']}", file=sys.stderr)
            return 2
        if width < 1:
            print(f"Invalid width: {width}", file=sys.stderr)
            return 2

    console = ConsoleSink(width=width)
    formatter = FormatterCollection()
    default_std_params(formatter, console.width)

    persistence = get_persistence()
    if options["profile"]:
        if not persistence.load_collection_params(options["profile"], formatter):
            logger.warning(f"Profile {options['profile']!r} not found or invalid, "
                           f"using defaults")

    try:
        text = build_demo(formatter, console.width)
    except TextLayoutError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    console.write(text)

    if options["save_profile"]:
        if not persistence.save_collection_params(options["save_profile"], formatter):
            print(f"Could not save profile {options['save_profile']!r}", file=sys.stderr)
            return 1

    if options["pdf"]:
        try:
            write_pdf(text, options["pdf"], options["page"])
        except OSError as e:
            print(f"Could not write {options['pdf']}: {e}", file=sys.stderr)
            return 1
    return 0


def main() -> None:
    args = sys.argv[1:]
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return
    if args and args[0] == "demo":
        sys.exit(run_demo(args[1:]))
    print(USAGE, file=sys.stderr)
    sys.exit(2)


if __name__ == "__main__":  # pragma: no cover
    main()
