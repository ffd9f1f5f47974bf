"""Infrastructure layer — external system integration.

This layer wraps all interaction with the engine's native client
library.  Every raw failure must be caught here and re-raised as a
:class:`~dsjob.exceptions.DsjobError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from dsjob.infra.dsapi_engine import DsapiEngine, load_library

__all__: list[str] = [
    "DsapiEngine",
    "load_library",
]
