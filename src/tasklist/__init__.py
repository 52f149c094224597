"""tasklist - a personal to-do list with filtering, sorting and stats."""

__version__ = "0.1.0"
