"""
labelprep Plugin Main Module.

This module serves as the main entry point for the labelprep plugin, a ChRIS
plugin that turns ZPL label templates into print-ready command streams.

Features:
- Renders `{{IF name}}...{{ENDIF}}` blocks and literal placeholders
- Rescales label geometry from the authoring resolution to the printer's
- Writes every prepared label to the output directory
- Optionally sends each label to a network printer on its raw print port

Usage:
    Run this module as a standalone script or through the `labelprep` entry
    point with an input and an output directory.

Examples:
    Prepare all templates for a 300 dpi printer:
        $ labelprep --sourceDPI 203 --targetDPI 300 in/ out/

    Fill placeholders from a file and override one on the command line:
        $ labelprep --placeholders job.json --set '<<LOT>>=A17' in/ out/

    Print two copies of each label:
        $ labelprep --printer zebra-dock-3 --copies 2 in/ out/

Note:
    A relative --placeholders path is looked up inside the input directory.
"""

from pathlib import Path
from argparse import Namespace, ArgumentParser, ArgumentDefaultsHelpFormatter
from chris_plugin import chris_plugin
from labelprep.config.settings import appsettings
from labelprep.lib.context import placeholders_load
from labelprep.lib.pipeline import label_prepare
from labelprep.lib.printer import label_print
from labelprep.models.dataModel import RenderResult, PrintResult
import asyncio
from rich.console import Console
from labelprep.lib.log import LOG
import sys
from typing import Final

__version__: Final[str] = "0.1.0"

console: Final[Console] = Console()

# Define the argument parser for the plugin
parser: Final[ArgumentParser] = ArgumentParser(
    description="A ChRIS plugin that renders and rescales ZPL label templates.",
    formatter_class=ArgumentDefaultsHelpFormatter,
)
parser.add_argument(
    "--sourceDPI",
    type=int,
    default=appsettings.sourceResolution,
    help="Resolution the templates were authored for",
)
parser.add_argument(
    "--targetDPI",
    type=int,
    default=appsettings.targetResolution,
    help="Resolution of the printer the labels are for",
)
parser.add_argument(
    "--placeholders", type=str, default="", help="JSON file with placeholder values"
)
parser.add_argument(
    "--set",
    dest="pairs",
    action="append",
    default=[],
    metavar="KEY=VALUE",
    help="Placeholder value, may be repeated; overrides --placeholders",
)
parser.add_argument(
    "--pattern", type=str, default="**/*.zpl", help="Glob selecting template files"
)
parser.add_argument("--printer", type=str, default="", help="Printer host or UNC path")
parser.add_argument("--copies", type=int, default=1, help="Copies of each label")
parser.add_argument(
    "-V", "--version", action="version", version=f"%(prog)s {__version__}"
)


def placeholderFile_locate(options: Namespace, inputdir: Path) -> Path | None:
    """Resolve the --placeholders option against the input directory."""
    if not options.placeholders:
        return None
    path: Path = Path(options.placeholders)
    return path if path.is_absolute() else inputdir / path


async def label_process(
    options: Namespace,
    placeholders: dict[str, str],
    template_file: Path,
    output_file: Path,
) -> bool:
    """Prepare, write and optionally print a single label template.

    Args:
        options: Parsed command-line arguments
        placeholders: Placeholder context for rendering
        template_file: Template to read
        output_file: Destination of the prepared command stream

    Returns:
        bool: True if the label was prepared (and printed, if requested)
    """
    template: str = template_file.read_text(encoding=appsettings.encoding)
    result: RenderResult = label_prepare(
        template, placeholders, options.sourceDPI, options.targetDPI
    )
    if not result.success:
        console.print(
            f"[bold red]{template_file.name}: {result.error.value if result.error else ''}"
            f" - {result.message}[/bold red]"
        )
        return False

    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(result.text, encoding=appsettings.encoding)
    if not appsettings.noComplain:
        console.print(f"[green]Prepared[/green] [cyan]{output_file}[/cyan]")

    if not options.printer:
        return True

    printed: PrintResult = await label_print(
        options.printer, options.copies, result.text
    )
    if not printed.success:
        console.print(
            f"[bold red]{template_file.name}: print failed - {printed.message}[/bold red]"
        )
        return False
    if not appsettings.noComplain:
        console.print(
            f"[green]Printed[/green] {printed.copies_sent} x [cyan]{template_file.name}[/cyan]"
        )
    return True


async def async_main(options: Namespace, inputdir: Path, outputdir: Path) -> int:
    """Asynchronous main function preparing every matched template.

    Args:
        options: Parsed command-line arguments
        inputdir: Directory containing template files
        outputdir: Directory for prepared labels

    Returns:
        int: Process exit code, 1 if any template failed
    """
    if options.sourceDPI <= 0 or options.targetDPI <= 0:
        LOG(f"Rejected resolutions {options.sourceDPI} -> {options.targetDPI}")
        console.print(
            "[bold red]Error:[/bold red] --sourceDPI and --targetDPI must be positive, "
            f"got {options.sourceDPI} -> {options.targetDPI}"
        )
        return 1

    try:
        placeholders: dict[str, str] = placeholders_load(
            placeholderFile_locate(options, inputdir),
            options.pairs,
            appsettings.encoding,
        )
    except (OSError, ValueError) as e:
        LOG(f"Placeholder loading failed: {e}")
        console.print(f"[bold red]Error:[/bold red] {e}")
        return 1

    templates: list[Path] = sorted(
        path for path in inputdir.glob(options.pattern) if path.is_file()
    )
    if not templates:
        console.print(
            f"[bold yellow]No templates matching '{options.pattern}' in {inputdir}[/bold yellow]"
        )
        return 0

    failures: int = 0
    for template_file in templates:
        output_file: Path = outputdir / template_file.relative_to(inputdir)
        try:
            prepared: bool = await label_process(
                options, placeholders, template_file, output_file
            )
            if not prepared:
                failures += 1
        except (OSError, ValueError) as e:
            LOG(f"Processing {template_file} failed: {e}")
            console.print(f"[bold red]{template_file.name}: {e}[/bold red]")
            failures += 1

    LOG(f"Prepared {len(templates) - failures} of {len(templates)} templates")
    return 1 if failures else 0


@chris_plugin(
    parser=parser,
    title="pl-labelprep",
    category="",
    min_memory_limit="100Mi",
    min_cpu_limit="1000m",
    min_gpu_limit=0,
)
def main(options: Namespace, inputdir: Path, outputdir: Path) -> None:
    """Main entry point for the ChRIS plugin.

    Args:
        options: Parsed command-line options
        inputdir: Directory containing template files
        outputdir: Directory for prepared labels
    """
    try:
        exit_code: int = asyncio.run(async_main(options, inputdir, outputdir))
    except KeyboardInterrupt:
        console.print("\n[bold cyan]Program interrupted by user. Exiting.[/bold cyan]")
        exit_code = 1
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
