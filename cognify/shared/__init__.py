"""Shared domain models and utilities for Cognify services."""
