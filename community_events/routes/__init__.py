"""HTTP routers, auto-registered by community_events.core.route_discovery."""
