#!/usr/bin/env python3
"""
Opkit - Operations Toolbox

Main entry point for the Opkit application.
Launches the PyQt5 GUI for batch id encoding, quoting and format conversion.

Usage:
    python main.py

Requirements:
    - PyQt5
    - hashids
"""

import sys


def check_dependencies():
    """Check for required dependencies and provide helpful error messages."""
    missing_deps = []

    try:
        import PyQt5  # noqa: F401
    except ImportError:
        missing_deps.append("PyQt5")

    try:
        import hashids  # noqa: F401
    except ImportError:
        missing_deps.append("hashids")

    if missing_deps:
        print("ERROR: Missing required dependencies:")
        for dep in missing_deps:
            print(f"  - {dep}")
        print("\nPlease install missing dependencies:")
        print(f"  pip install {' '.join(missing_deps)}")
        print("\nThen run the application again.")
        sys.exit(1)


def main():
    """Main application entry point."""
    from opkit import __version__

    print(f"Opkit v{__version__} - Operations Toolbox")
    print("=" * 50)

    check_dependencies()

    try:
        from opkit.gui import main as gui_main
        gui_main()

    except ImportError as e:
        print(f"ERROR: Could not import Opkit modules: {e}")
        print("\nPlease ensure the package is installed (pip install -e .[gui]).")
        sys.exit(1)


if __name__ == '__main__':
    main()
