"""Realtime infrastructure (Socket.IO).

Holds the presence registry, the direct-message delivery pipeline and the
Socket.IO server that wires them to client connections.
"""
