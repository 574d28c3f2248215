"""
Entry Point Script (Bootstrap)
==============================
Starts the editor from a source checkout without installing it.

Why is this file needed?
------------------------
1. It is located outside the 'src' package to act as a convenient runner.
2. It puts 'src' on 'sys.path' so that 'reactioneditor' resolves without
   'pip install -e .'.

Usage:
    $ python run.py --dataset example.pb --index 0
"""
import sys
import os

# Add the 'src' directory to the Python path
current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

from reactioneditor.__main__ import main

if __name__ == "__main__":
    sys.exit(main())
