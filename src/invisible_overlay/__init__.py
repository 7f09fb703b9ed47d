"""Overlay near-invisible, machine-readable text onto existing PDFs."""

__version__ = "0.1.0"

__all__ = ["__version__", "main"]


def main() -> None:
    """Console entry point proxy for the `invisible-overlay` script."""
    from .cli import main as _main

    _main()
