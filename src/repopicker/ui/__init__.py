"""Selector presentation layer."""
