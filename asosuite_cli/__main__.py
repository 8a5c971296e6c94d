"""``python -m asosuite_cli`` entry point."""

from asosuite_cli.cli import main

main()
