"""Bridges between UI toolkits and the key binding engine."""
