"""Punto de entrada principal."""

from .tui.app import main

if __name__ == "__main__":
    main()
