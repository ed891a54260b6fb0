"""
So that `python -m nullcheck program.rkt` works the same as the console script.
"""
from .cmdline import main

main()
