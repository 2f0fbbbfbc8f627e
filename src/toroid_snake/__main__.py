# src/toroid_snake/__main__.py
"""Entry point: ``python -m toroid_snake``."""

from toroid_snake.main import main

main()
