"""Allow running Convo CLI with ``python -m convo_cli``."""

from .cli import run

if __name__ == "__main__":
    run()
