"""Prompt normalization and provider adaptation."""
