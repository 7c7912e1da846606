"""Allow `python -m lolc`."""

from .cli import main

main(prog_name="lolc")
