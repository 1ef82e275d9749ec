"""Core library: composition, capabilities, errors, config and the reference host."""
