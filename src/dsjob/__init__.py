"""dsjob — command-line controller for a remote job-orchestration engine.

Starts, stops, inspects and logs against named jobs inside named
projects through the engine's request/response client API.
"""

from dsjob.version import __version__

__all__: list[str] = ["__version__"]
