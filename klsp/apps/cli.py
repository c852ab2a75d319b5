"""
Command Line Interface module for klsp.

This module provides the main entry point for the klsp executable. With no
subcommand it serves the Language Server Protocol on stdio, which is how
editors launch it. The other subcommands run the same analysis on a file from
the shell.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from pygls.uris import from_fs_path

# Logging is configured in klsp/__init__.py when imported
from klsp import __version__
from klsp.analysis.definitions import scan_definitions
from klsp.core.config import ServerConfig
from klsp.lsp.server import create_server
from klsp.service import KLanguageService

# Configure logger for this module
logger = logging.getLogger(__name__)


class CLI:
    """
    Encapsulates the CLI application logic.

    This class is responsible for:
    - Parsing command-line arguments
    - Building the server configuration
    - Starting the language server or running a one-off analysis
    """

    @classmethod
    def start(cls, argv: Optional[List[str]] = None) -> int:
        """
        Start the CLI application.

        Args:
            argv: Arguments without the program name; sys.argv when omitted

        Returns:
            Process exit code
        """
        try:
            args = cls._parse_args(argv)
            config = ServerConfig.from_env().with_overrides(
                checker=args.checker,
                checker_timeout=args.checker_timeout,
            )

            if args.subcommand in (None, "serve"):
                return cls._serve(args, config)
            elif args.subcommand == "check":
                return cls._check(args.file, config)
            elif args.subcommand == "definitions":
                return cls._definitions(args.file)
            return 2

        except KeyboardInterrupt:
            logger.info("Application interrupted by user")
            return 0

        except Exception as e:
            logger.critical(f"Unhandled exception: {e}", exc_info=True)
            print(f"Error: {str(e)}", file=sys.stderr)
            return 1

    @staticmethod
    def _serve(args: argparse.Namespace, config: ServerConfig) -> int:
        """Run the language server until the client disconnects."""
        server = create_server(config)
        if getattr(args, "tcp", False):
            logger.info(f"Serving on {args.host}:{args.port}")
            server.start_tcp(args.host, args.port)
        else:
            logger.info("Serving on stdio")
            server.start_io()
        return 0

    @staticmethod
    def _check(path: str, config: ServerConfig) -> int:
        """Run the checker on a file and print its diagnostics."""
        path = os.path.abspath(path)
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()

        service = KLanguageService(config)
        uri = from_fs_path(path)
        service.open_document(uri, text)
        report = service.run_diagnostics(uri)

        if report is None:
            print(f"{path}: checker could not be run", file=sys.stderr)
            return 2
        if not report.diagnostics:
            print(f"{path}: ok")
            return 0

        for diagnostic in report.diagnostics:
            start = diagnostic.range.start
            print(f"{path}:{start.line + 1}:{start.character + 1}: {diagnostic.severity.name.lower()}: {diagnostic.message}")
        return 1

    @staticmethod
    def _definitions(path: str) -> int:
        """Print every definition in a file in document order."""
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()

        definitions = scan_definitions(text)
        for name, span in sorted(definitions.items(), key=lambda item: item[1].start.line):
            print(f"{span.start.line + 1}:{span.start.character + 1}\t{name}")
        return 0

    @staticmethod
    def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
        """
        Parse command-line arguments.

        Returns:
            Parsed argument namespace
        """
        parser = argparse.ArgumentParser(
            prog="klsp",
            description="K Language Server",
            formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        )
        parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
        parser.add_argument(
            "--checker",
            help="Checker command; the file path is appended (default: $KLSP_CHECKER or /usr/local/bin/k)",
        )
        parser.add_argument(
            "--checker-timeout",
            help="Seconds to wait for the checker, 0 to wait forever (default: $KLSP_CHECKER_TIMEOUT or 30)",
        )

        subparsers = parser.add_subparsers(dest="subcommand", help="Subcommand to run")

        # 1. Serve subcommand - the default when editors launch the binary
        serve_parser = subparsers.add_parser("serve", help="Serve the language server protocol")
        serve_parser.add_argument("--tcp", action="store_true", help="Listen on TCP instead of stdio")
        serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind with --tcp")
        serve_parser.add_argument("--port", type=int, default=2087, help="Port to bind with --tcp")

        # 2. Check subcommand - run the checker once
        check_parser = subparsers.add_parser("check", help="Check a file and print its diagnostics")
        check_parser.add_argument("file", help="Path of the K file to check")

        # 3. Definitions subcommand - dump the definition index
        definitions_parser = subparsers.add_parser("definitions", help="List the definitions in a file")
        definitions_parser.add_argument("file", help="Path of the K file to scan")

        return parser.parse_args(argv)


def main() -> None:
    """Console script entry point."""
    sys.exit(CLI.start())


if __name__ == "__main__":
    main()
