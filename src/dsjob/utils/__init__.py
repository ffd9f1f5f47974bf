"""Shared utilities for operator-supplied text.

Rules
-----
* No business logic.
* No I/O.
* Importable by any layer.
"""

from dsjob.utils.numbers import lenient_float, lenient_int

__all__: list[str] = ["lenient_float", "lenient_int"]
