"""SectionForge: turn sections of live web pages into React components."""

__version__ = "0.1.0"
