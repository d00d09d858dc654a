# scripts/census_export.py
"""
Educacenso export command line, runnable from a source checkout.

Usage:
    python scripts/census_export.py export snapshot.json --all
    python scripts/census_export.py report snapshot.json --format pdf
"""
import sys
from pathlib import Path

# Add the backend package to Python path
sys.path.append(str(Path(__file__).parent.parent / "backend"))
from educacenso.cli import main

if __name__ == "__main__":
    sys.exit(main())
