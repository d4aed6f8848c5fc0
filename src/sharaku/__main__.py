"""Module entry point for ``python -m sharaku``."""

import sys

from sharaku.ui.cli import main

if __name__ == "__main__":
    sys.exit(main())
