"""Module entrypoint.

Allows:
    python -m loganalyzer app.log --stats
"""

from __future__ import annotations

from loganalyzer.cli import main

if __name__ == "__main__":
    main()
