"""Run the CLI with ``python -m splurge_ava_to_jest [command] [options]``."""

from .cli import main

if __name__ == "__main__":
    main()
