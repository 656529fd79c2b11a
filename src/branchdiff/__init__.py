"""branchdiff - compare git branches and render conflict-marked diffs."""

__version__ = "0.3.0"
