"""Jito block-engine endpoint speed test."""
