"""
Device Server Client.

Authenticated client for the device server's hypermedia REST API and the
command-line front end for managing access keys.
"""

__version__ = "0.1.0"
