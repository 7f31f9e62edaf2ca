"""Client-side reader state: view tracking and reimagined display."""
