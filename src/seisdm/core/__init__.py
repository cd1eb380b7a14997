"""Core runtime utilities for seisdm."""
