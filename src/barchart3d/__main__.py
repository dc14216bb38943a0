"""Command-line interface."""
from barchart3d.main import main

if __name__ == "__main__":
    main()
