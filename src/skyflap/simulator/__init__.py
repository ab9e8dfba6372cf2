"""Desktop pygame frontend for SKYFLAP."""
