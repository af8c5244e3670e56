"""Registry loading -- endpoint documents and handler import targets.

* :mod:`~derivekit.registry.loader` -- read JSON/YAML endpoint registries
  from files, URLs, or stdin.
* :mod:`~derivekit.registry.handlers` -- resolve ``module:attribute``
  targets into handler registries.
"""

from derivekit.registry.handlers import load_handlers
from derivekit.registry.loader import load_document, load_endpoints, parse_endpoints

__all__ = ["load_document", "load_endpoints", "load_handlers", "parse_endpoints"]
