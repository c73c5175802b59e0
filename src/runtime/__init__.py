"""Runtime package.

Keep this module dependency-light: importing `src.runtime.*` in unit tests
should not open any network client.
"""

__all__: list[str] = []
