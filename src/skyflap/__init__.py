"""SKYFLAP: a single-screen flap-through-the-gaps arcade game."""

__version__ = "0.1.0"
