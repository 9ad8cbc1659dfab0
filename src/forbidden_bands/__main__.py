"""Allow ``python -m forbidden_bands``."""

from forbidden_bands.cli.main import main

main()
