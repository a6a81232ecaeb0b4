"""Cognify: questionnaire-based mental-wellness assessment."""

__version__ = "1.0.0"
