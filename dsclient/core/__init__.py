"""
Core Infrastructure.

Configuration, logging, and the error taxonomy shared by the client and CLI.
"""
