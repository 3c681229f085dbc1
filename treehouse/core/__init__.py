"""Core module for the treehouse application."""
