#!/usr/bin/env python3
"""
Route Scanner v1.0
==================
Pattern-based inventory of an Express-style backend's network surface:
routes, mount prefixes, request parameters, headers, environment variables
and comments, recovered from source text without executing it.

Features:
  - Route + mount prefix composition into a deduplicated endpoint list
  - Path, body and query parameter discovery, synthetic query string
  - Header, environment variable and comment inventories
  - Local directories or Git URLs (shallow clone)
  - Sequential or parallel scanning

Usage: python main.py [OPTIONS] <path>
"""

import sys
import os
import re
import argparse
import tempfile
import shutil
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

# =============================================================================
# DEPENDENCY CHECK
# =============================================================================
REQUIRED = {"rich": "rich>=13.7.0", "git": "gitpython>=3.1.40", "dotenv": "python-dotenv>=1.0.0",
            "yaml": "pyyaml>=6.0"}

def check_deps():
    missing = []
    for mod, pkg in REQUIRED.items():
        try:
            __import__(mod)
        except ImportError:
            missing.append(pkg)
    if missing:
        print(f"\nMissing: pip install {' '.join(missing)}\n")
        sys.exit(1)

check_deps()

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn
from rich import box
from rich.markup import escape
from dotenv import load_dotenv
import git

from route_scanner import __version__, RouteScanner, ReportWriter, ScanResult, ScannerConfig

load_dotenv()
console = Console()

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================
def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """Configure structured logging for the scanner."""
    logger = logging.getLogger("route_scanner")
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Clear existing handlers
    logger.handlers.clear()

    # Console handler with structured format
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)  # Only warnings and errors to console
    console_formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    # File handler if specified
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_formatter = logging.Formatter(
            '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
            datefmt='%Y-%m-%dT%H:%M:%S'
        )
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    return logger

logger = setup_logging()

# =============================================================================
# OUTPUT FORMATTERS
# =============================================================================
METHOD_COLORS = {"GET": "green", "POST": "yellow", "PUT": "blue", "PATCH": "cyan", "DELETE": "red"}

def fmt_method(m: str) -> str:
    color = METHOD_COLORS.get(m, "white")
    return f"[{color}]{m}[/{color}]"

def make_table(result: ScanResult, limit: int = 100) -> Table:
    t = Table(title=" Discovered Routes", box=box.ROUNDED, header_style="bold magenta")
    t.add_column("#", style="dim", width=4)
    t.add_column("Method", width=8)
    t.add_column("Route", max_width=50)
    t.add_column("File", style="dim", max_width=40)

    for i, c in enumerate(result.combinations[:limit], 1):
        route = c.route[:47] + "..." if len(c.route) > 50 else c.route
        t.add_row(str(i), fmt_method(c.method), escape(route), escape(Path(c.file).name))

    if len(result.combinations) > limit:
        t.add_row("...", "...", f"... +{len(result.combinations) - limit} more", "")

    return t

def make_summary(result: ScanResult, language: str = "") -> Panel:
    s = result.stats
    txt = f"""
[bold cyan] Scan Summary[/bold cyan] [dim]{language}[/dim]

[bold]Unique Endpoints:[/bold] {len(result.endpoints)}
[bold]Routes (with prefixes):[/bold] {len(result.combinations)} | Mount prefixes: {len(result.base_paths)}
[bold]Files Scanned:[/bold] {s.get('files_scanned', 0)} | Skipped: {s.get('files_skipped', 0)} | Tests skipped: {s.get('test_files_skipped', 0)} | Errored: {s.get('files_errored', 0)}

[bold cyan]Parameters:[/bold cyan]
   Path mappings: {len(result.path_parameters)}
   Body mappings: {len(result.body_parameters)}
   Query mappings: {len(result.query_parameters)}

[bold cyan]Other:[/bold cyan]
   Headers: {len(result.header_names)}
   Environment variables: {len(result.env_vars)}
   Other URLs: {len(result.other_urls)}
   Comment blocks: {sum(len(c.comments) for c in result.comments)}
"""
    return Panel(txt, title=" Analysis Results", border_style="cyan")

def language_label(scanner: RouteScanner) -> str:
    """Extractor language plus the extensions the collector actually selects."""
    extensions = ", ".join(sorted(scanner.collector.extensions))
    return f"{scanner.extractor.language.value} ({extensions} patterns)"

# =============================================================================
# GIT HELPER
# =============================================================================
GIT_URL_PREFIXES = ("http://", "https://", "git@")

def clone_repo(url: str) -> str:
    tmp = tempfile.mkdtemp(prefix="route_scan_")
    console.print(f"[cyan]Cloning: {url}[/cyan]")
    git.Repo.clone_from(url, tmp, depth=1)
    console.print(f"[green] Cloned[/green]")
    return tmp

def repo_folder_name(url: str) -> str:
    """Repository name of a Git URL, e.g. ``git@host:org/api.git`` -> ``api``."""
    name = re.split(r"[/:]", url.rstrip("/"))[-1]
    return name[:-4] if name.endswith(".git") else name

# =============================================================================
# MAIN CLI
# =============================================================================
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=f"Route Scanner v{__version__}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py ./backend                       # Scan, write reports to ./data/backend
  python main.py ./backend --include-tests       # Also scan *.spec.js / *.test.ts files
  python main.py ./backend --parallel            # Parallel scan for large repos
  python main.py ./backend -o scan.json          # Also write one combined JSON file
  python main.py https://github.com/org/api.git  # Clone and scan
        """
    )

    # Target
    parser.add_argument("target", help="Directory or Git URL to scan")

    # Output options
    output_group = parser.add_argument_group("Output Options")
    output_group.add_argument("--output-dir", metavar="DIR",
                             help="Root directory for report folders (default: data)")
    output_group.add_argument("-o", "--output", metavar="FILE",
                             help="Also write the whole result as one JSON file")
    output_group.add_argument("--tag", metavar="TAG",
                             help="Placeholder prefix for the synthetic query string (default: TAG)")

    # Scan options
    scan_group = parser.add_argument_group("Scan Options")
    scan_group.add_argument("--include-tests", action="store_true",
                           help="Include *.spec.* and *.test.* files")
    scan_group.add_argument("--parallel", action="store_true",
                           help="Enable parallel file scanning")
    scan_group.add_argument("--workers", type=int,
                           help="Number of parallel workers (default: 4)")
    scan_group.add_argument("--max-file-size", type=int,
                           help="Max file size in MB to scan (default: 10)")
    scan_group.add_argument("--config", metavar="FILE",
                           help="Configuration file (JSON/YAML)")

    # Logging
    log_group = parser.add_argument_group("Logging")
    log_group.add_argument("--log-level", default="INFO",
                          help="Log level for the log file (default: INFO)")
    log_group.add_argument("--log-file", metavar="FILE",
                          help="Write JSON-lines log to file")

    # General
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--quiet", "-q", action="store_true", help="Minimal output")
    return parser

def build_config(args: argparse.Namespace) -> ScannerConfig:
    if args.config:
        config = ScannerConfig.from_file(args.config)
    else:
        config = ScannerConfig.from_env()

    # Override with CLI args
    if args.include_tests:
        config.include_tests = True
    if args.workers is not None:
        config.parallel_workers = args.workers
    if args.max_file_size is not None:
        config.max_file_size_mb = args.max_file_size
    if args.output_dir:
        config.output_dir = args.output_dir
    if args.tag:
        config.query_tag = args.tag
    config.verbose = config.verbose or args.verbose
    return config

def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)

    if args.log_file or args.verbose:
        setup_logging("DEBUG" if args.verbose else args.log_level, args.log_file)

    # Banner
    if not args.quiet:
        console.print(Panel.fit(
            f"[bold cyan] Route Scanner v{__version__}[/bold cyan]\n"
            "[dim]Routes | Mount prefixes | Parameters | Headers | Env vars | Comments[/dim]",
            border_style="cyan"
        ))

    target = args.target
    tmp = None
    folder_name = None

    try:
        config = build_config(args)

        # Clone if URL
        if target.startswith(GIT_URL_PREFIXES):
            folder_name = repo_folder_name(target)
            tmp = clone_repo(target)
            target = tmp
        elif not os.path.isdir(target):
            console.print(f"[red]Error: Directory not found: {target}[/red]")
            sys.exit(1)

        scanner = RouteScanner(target, config, folder_name=folder_name)

        if not args.quiet:
            console.print(f"\n[bold cyan] Scanning directory:[/bold cyan] {args.target}")

        # Progress callback
        def progress_cb(cur, tot, fp):
            prog.update(task, completed=(cur / tot) * 100,
                        description=f"[cyan]{Path(fp).name[:25]}")

        with Progress(SpinnerColumn(), TextColumn("[progress.description]{task.description}"),
                      BarColumn(), TextColumn("{task.percentage:>3.0f}%"),
                      console=console, disable=args.quiet) as prog:
            task = prog.add_task("[cyan]Scanning", total=100)

            if args.parallel:
                result = scanner.scan_parallel(progress_cb=progress_cb)
            else:
                result = scanner.scan(progress_cb=progress_cb)

        writer = ReportWriter(config.output_dir)
        written = writer.write(result)

        if args.output:
            extra: Dict[str, Any] = {
                "timestamp": datetime.now().isoformat(),
                "target": args.target,
                "version": __version__,
            }
            writer.write_combined(result, args.output, extra)
            written["combined"] = Path(args.output)

        if not args.quiet:
            console.print(f"\n[green] Found {len(result.endpoints)} unique endpoints[/green]")
            console.print("\n" + "=" * 70)
            console.print(make_summary(result, language_label(scanner)))
            if result.combinations:
                console.print(make_table(result))
            console.print(f"\n[green] Reports written to: {writer.folder_for(result)}[/green]")
            if config.verbose:
                for name, path in written.items():
                    console.print(f"   [dim]{name}: {path}[/dim]")

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"\n[red]Error: {e}[/red]")
        if args.verbose:
            console.print_exception()
        sys.exit(1)
    finally:
        if tmp and os.path.exists(tmp):
            shutil.rmtree(tmp, ignore_errors=True)

    if not args.quiet:
        console.print("\n[bold green] Complete![/bold green]")

    sys.exit(0)

if __name__ == "__main__":
    main()
