"""Docker Engine installer for Debian-family hosts (Ubuntu by default).

Core design goals:
- Strictly sequential, fail-fast steps
- Idempotent host mutations (query first, no-op when nothing to do)
- Narrow capabilities over OS tools so steps are testable with fakes
- Centralized logging
"""

__all__ = []
