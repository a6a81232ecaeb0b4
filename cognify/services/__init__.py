"""Cognify services.

- wellness_service: 25-item questionnaire scoring with dual-model inference
"""
