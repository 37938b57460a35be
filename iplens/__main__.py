"""
IPLens - IP address lookups against ipinfo.io

Entry point for running as a module:
    python -m iplens lookup <address>
"""

from .cli import main

if __name__ == '__main__':
    main()
