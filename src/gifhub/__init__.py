"""`gifhub` - animated GIFs of yearly GitHub activity.

Subpackages:
- scraper: Profile page fetching and percentage extraction
- graph: Coordinate mapping and frame rendering
- encoding: Rasterize and bundle backends
- pipeline: Orchestrator, stages, channels
- schemas: Configuration models
- cli: Command-line entry point
"""

__version__ = "0.1.0"
