"""resume-studio: resume scoring, optimization and document export."""

__version__ = "0.1.0"
