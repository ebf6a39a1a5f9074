"""Flet views for the Sangam client."""
