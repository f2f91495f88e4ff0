"""
Convenience launcher for the BigPixel editor window.

Usage:
    python -m bigpixel.gui IMAGE.bmp
"""

from __future__ import annotations

from .cli import main as _run_cli


def main() -> None:
    """Parse the command line and open the editor."""
    raise SystemExit(_run_cli())


if __name__ == "__main__":
    main()
