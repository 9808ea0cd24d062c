#!/usr/bin/env python
"""
Launcher script for Label Lab.

Usage from repo root:
    python run_label_designer.py

Alternative:
    python -m label_designer
"""
from label_designer.app import main

if __name__ == "__main__":
    main()
