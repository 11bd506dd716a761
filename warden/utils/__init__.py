"""
Invite Warden - Utilities Package
=================================

- keyed_lock.py: Per-key asyncio mutex
- async_utils.py: Best-effort awaits and safe background tasks
- error_handler.py: Error categorisation and the global async safety net
"""
