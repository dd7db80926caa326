"""Domain services orchestrating repositories and external clients."""
