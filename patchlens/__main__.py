"""Allow ``python -m patchlens``."""

from patchlens.cli import main

main()
