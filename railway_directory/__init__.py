"""
Railway division contacts directory client.

Async client for the directory backend:
- integrations: HTTP transport, per-resource services, contracts, mock backend
- state: containers that fetch through the services and hold loading/error/result
- app: composition root wiring the two together
"""

__version__ = "1.0.0"
