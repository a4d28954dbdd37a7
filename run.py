"""
Entry point for Flipbook

Run this script to start the application:
    python run.py
"""

from flipbook.main import main

if __name__ == "__main__":
    main()
