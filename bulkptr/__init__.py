"""
BulkPTR - Bulk Reverse DNS Resolver

Resolves large lists of IPv4/IPv6 addresses to hostnames via PTR
queries spread round-robin over a pool of nameservers.
"""

__version__ = "1.0.0"
