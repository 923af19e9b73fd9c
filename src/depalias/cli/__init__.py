"""depalias command line interface (Typer)."""
