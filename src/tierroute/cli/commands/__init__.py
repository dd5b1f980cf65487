"""CLI command implementations for tierroute.

- route: route, explain, tier and adapt commands
- config: manage configuration
"""
