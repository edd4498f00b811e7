"""Account rules and user storage."""
