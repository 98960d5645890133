"""CLI commands for biztracker."""
