"""Module entry point for `python -m oas_type_model`."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
