"""Calendar bootstrap (import side-effect)."""
from .api import initialize
from .sources.builtin import default_source

initialize(default_source())
