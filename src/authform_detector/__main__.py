"""Allows ``python -m authform_detector``."""

from .cli import main

main()
