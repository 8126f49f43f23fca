"""
Script to ingest the configured CSV file into the document store
"""

import sys
import os

# Add current directory to path to allow imports from core, ingestion, etc.
sys.path.append(os.getcwd())

from ingestion.entrypoint import main


if __name__ == "__main__":
    sys.exit(main())
