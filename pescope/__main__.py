"""
Pescope Module Entry Point
===========================

Allows running the Pescope CLI via: python -m pescope
"""

from pescope.cli import main

if __name__ == "__main__":
    main()
