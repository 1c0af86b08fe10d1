"""Tui: línea de comandos y salida de consola."""
