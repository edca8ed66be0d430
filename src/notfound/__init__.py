"""Localized custom 404 content for Flask sites."""
