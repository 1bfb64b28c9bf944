"""
Fluxor CLI.

Usage:
    fluxor discover my_app.store
    fluxor discover my_app.store my_app.widgets --lifetime singleton
    fluxor discover --env-file .env
"""

from fluxor import __version__

__cli_name__ = "fluxor"
