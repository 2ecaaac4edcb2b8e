"""
Run the CSV store seed from CLI.
"""

from __future__ import annotations

from seeder.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
