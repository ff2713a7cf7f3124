"""Find missing and unused translation keys in Laravel-style projects."""

__version__ = "0.3.0"
