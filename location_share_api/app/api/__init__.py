"""HTTP routers; ``router`` aggregates every domain's endpoints."""
