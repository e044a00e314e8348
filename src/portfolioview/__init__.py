"""portfolioview: render JSON portfolio content into filterable page views."""

__version__ = "0.1.0"
