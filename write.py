"""
Entry point script for the mpages CLI.
Allows running with: python write.py
"""

from mpages.main import app

if __name__ == "__main__":
    app()
