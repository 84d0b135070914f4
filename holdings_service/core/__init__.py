"""Core building blocks shared by features."""
