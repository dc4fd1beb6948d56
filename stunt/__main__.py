#!/usr/bin/env python3
"""
Allow ``python -m stunt <input> <output>``
"""

from .cli.main import main

if __name__ == "__main__":
    main()
