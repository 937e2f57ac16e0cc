"""Domain layer (pure logic).

- Keep game rules and stat calculations here.
- Avoid I/O: no DB sessions, no HTTP/FastAPI.
- Prefer deterministic functions (randomness is passed in as a numpy Generator).
"""
