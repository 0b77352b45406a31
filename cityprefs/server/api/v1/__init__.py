"""Version 1 of the cityprefs HTTP API."""
