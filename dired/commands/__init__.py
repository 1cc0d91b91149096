"""Typer command modules for dired."""
