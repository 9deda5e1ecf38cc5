"""Mail parsing, payload formatting and dispatch policy.

Nothing in this package touches the network, the filesystem or the host
name; those arrive as arguments from ``app``.
"""
