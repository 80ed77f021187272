"""graphlens — browse embedded graph databases and project queries into node/link graphs."""

__version__ = "0.1.0"
