"""Route Modules — one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes never contain business logic (delegate to stores)
    - Every handler is `async def` and calls the stores inline on the event loop
      thread; the stores are not thread-safe and rely on this for total ordering

Design Decisions:
    - async def over def: FastAPI runs plain def handlers in a threadpool, where two
      requests could interleave inside one store operation. Store calls are short
      (in-memory checks plus one local slot write), so briefly blocking the loop
      is accepted in exchange for no locking
"""
