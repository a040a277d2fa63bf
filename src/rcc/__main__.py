"""Allow running the compiler with ``python -m rcc``."""

from rcc.cli.rcc import main


if __name__ == "__main__":
    main(prog_name="rcc")
