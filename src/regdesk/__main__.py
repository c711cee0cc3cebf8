"""Allow ``python -m regdesk``."""

from regdesk.cli import main

main()
