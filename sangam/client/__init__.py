"""Sangam Flet client."""
