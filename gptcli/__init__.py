"""
Command line utility for translating pseudo commands into executable shell commands.

This package takes an informal, possibly misspelled "pseudo command", asks an OpenAI
chat completion model to turn it into a real command for the current platform and
command shell, and runs the result after the user confirms it.
"""

__version__ = "0.1"
