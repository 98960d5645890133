"""Document layout and encoding for biztracker."""
