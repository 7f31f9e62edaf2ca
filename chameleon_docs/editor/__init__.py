"""Client-side editor state: history, formatting, section board."""
