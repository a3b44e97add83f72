"""
pages: schema-driven object mapping for dashboard documents.

## Packages
- pages.mapping: declarative codec (decode/encode/equals/clone/mutate) over registered
  classes, collections and tagged unions.
- pages.config: settings (env > TOML > defaults) and structlog logging setup.

## Notes
- Zero-IO core: ``pages.mapping`` performs no file or network access.
- Domain models (dashboards, visualizations, time ranges) live with their consumers and
  register their schemas at import time.
"""

__version__ = "0.1.0"
