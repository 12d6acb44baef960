"""Allow ``python -m unitbench``."""

from unitbench.cli import main

raise SystemExit(main())
