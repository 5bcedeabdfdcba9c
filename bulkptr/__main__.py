"""
BulkPTR - Bulk Reverse DNS Resolver

Entry point for running as a module:
    python -m bulkptr ips.txt
"""

from .cli import main

if __name__ == '__main__':
    main()
