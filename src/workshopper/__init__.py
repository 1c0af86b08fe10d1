"""Workshopper: ejercicios de programación guiados desde la terminal."""

__version__ = "0.1.0"
