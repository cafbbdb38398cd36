"""Go License Analyzer - license attribution and policy checks for dependencies."""

__version__ = "0.1.0"
