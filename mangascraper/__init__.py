"""Models, validation, a circuit breaker and services for a manga scraping and search backend."""

__version__ = "0.1.0"