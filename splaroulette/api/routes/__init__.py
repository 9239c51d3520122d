"""Route Modules - one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Every mutating route returns the refreshed state view
    - Every route is `async def`: intents run one at a time on the event loop,
      never in the threadpool, so the controller needs no locking

Design Decisions:
    - Intents touch the synchronous store inline and briefly block the loop;
      a single-session local SQLite store writes a handful of short rows per intent
"""
