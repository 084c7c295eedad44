"""Command-line option parsing for the pose viewer."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass

DEFAULT_VIEWER_ADDR = "127.0.0.1:9876"
DEFAULT_THREADS = 3

_URL_HOST_LIMIT = 18

_HELP = (
    "Usage: measure [OPTIONS]\n"
    "  -h, --help        Show help text\n"
    "  --enable_rerun    {true, false}. Default is true.\n"
    "  --viewer_addr     IP:PORT for rerun viewer. Default is "
    "127.0.0.1:9876.\n"
    "  --threads         Number of image loader threads. Default is 3.\n"
)


@dataclass
class Cli:
    """Options chosen on the command line."""

    path: str = ""
    enable_rerun: bool = True
    viewer_addr: str = DEFAULT_VIEWER_ADDR
    threads: int = DEFAULT_THREADS


class HelpRequested(Exception):
    """Raised when the user asks for the help text instead of a run."""


def help_text():
    """Return the usage text."""
    return _HELP


def _atoi(text):
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def parse_args(argv=None):
    """Parse command-line arguments (without the program name) into a Cli.

    Raises HelpRequested when -h or --help is seen.  An option's value is
    itself examined as an argument too, so "--viewer_addr --help" asks for help.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    cli = Cli()
    for arg, value in zip(args, args[1:] + [None]):
        if arg in ("-h", "--help"):
            raise HelpRequested()
        if value is None:
            continue
        if arg == "--enable_rerun":
            if value.lower() in ("false", "0"):
                cli.enable_rerun = False
            state = "true" if cli.enable_rerun else "false"
            print(f"CLI OPTION SET: Rerun enabled = {state}")
        elif arg == "--viewer_addr":
            cli.viewer_addr = value
            print(f"CLI OPTION SET: Rerun viewer IP:PORT = {cli.viewer_addr}")
        elif arg == "--threads":
            cli.threads = _atoi(value)
            print(f"CLI OPTION SET: Loader threads = {cli.threads}")
    return cli


def build_url(ip_str):
    """Build a viewer proxy URL from an IP:PORT string, truncating overlong input."""
    host = ip_str.split("\0", 1)[0][:_URL_HOST_LIMIT]
    return f"rerun+http://{host}/proxy"