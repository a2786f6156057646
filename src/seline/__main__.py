"""Allow running as python -m seline."""

from .cli import main

main()
