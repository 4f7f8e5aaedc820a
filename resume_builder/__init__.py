"""Resume builder: draft storage, resume API, ATS optimization and PDF export."""

__version__ = "1.0.0"
