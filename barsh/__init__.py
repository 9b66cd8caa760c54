import logging

from barsh.errors import (BarshError, ConfigError, EmptyCommand, NoSelection,
                          NotEditing, ParseError, SpawnError, StreamError)
from barsh.hooks import override, overridable
from barsh.parser import StreamAccumulator, parse
from barsh.state import ListState, Mode

__version__ = "0.2.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
