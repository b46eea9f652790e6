"""Routing configuration for a returns hub shop.

Wires the routing engine to storage and HTTP:
- SQLAlchemy models with ShopMixin
- Async repositories for rules and destinations
- RoutingService that snapshots a shop and calls the engine
- FastAPI router for configuration, validation and routing previews
"""
