"""
Entry Point Script (Bootstrap)
==============================
Development runner that works without installing the package.

It is located outside the 'src' package and puts 'src' on 'sys.path' so
imports like 'from barchart3d.model...' resolve.

Usage:
    $ python run.py [data.json] [--legend]
"""
import sys
import os

# Add the 'src' directory to the Python path
current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

from barchart3d.main import main

if __name__ == "__main__":
    main()
