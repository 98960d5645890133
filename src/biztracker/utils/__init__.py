"""Utility functions for biztracker."""

from biztracker.utils.amount_parser import parse_amount

__all__ = ["parse_amount"]
