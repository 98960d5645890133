"""Command-line interface for biztracker."""
