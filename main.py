"""
Compatibility entrypoint.

Prefer running:
  - `syrinc fix lyrics.lrc`
or:
  - `python -m syrinc fix lyrics.lrc`
"""

from syrinc.cli import main as cli_main


def cli() -> None:
    cli_main()


if __name__ == "__main__":
    cli()
