"""Allow ``python -m omarchy_mango``."""

from .cli import main

raise SystemExit(main())
