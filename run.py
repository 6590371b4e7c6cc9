"""
Entry Point Script (Bootstrap)
==============================
Runs the fractal demo straight from a source checkout.

Why is this file needed?
------------------------
1. It is located outside the 'src' package to act as a convenient runner.
2. It modifies 'sys.path' so that 'spheretest' resolves without installing
   the package first.

Usage:
    $ python run.py --max-level 4 --min-level 2 --plot
"""
import sys
import os

current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

from spheretest.__main__ import main

if __name__ == "__main__":
    main()
