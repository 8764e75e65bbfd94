"""HTTP layer: routers, dependencies and the request pipeline."""
