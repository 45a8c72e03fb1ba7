"""Inkwell blog backend application package."""
