"""Entry point for running snapp as a module.

This allows running the application with:
    python -m snapp project NAME
"""

from snapp.cli import app

if __name__ == "__main__":
    app()
