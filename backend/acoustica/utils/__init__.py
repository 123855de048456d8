"""Request helpers shared by the route blueprints."""
