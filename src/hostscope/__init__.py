"""hostscope - cross-platform system facts in a full-screen view."""

__version__ = "0.1.0"
