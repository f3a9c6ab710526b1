"""
So that `python -m lox program.lox` does the same as `lox program.lox`.
"""
from .cmdline import main

main()
