class BarshError(Exception):
    """Base class for everything barsh reports to the user."""


class ConfigError(BarshError):
    pass


class StreamError(BarshError):
    """The completion stream failed before the interactive phase."""


class NoSelection(BarshError):
    def __init__(self, msg="no command selected"):
        super().__init__(msg)


class NotEditing(BarshError):
    def __init__(self, msg="not in editing mode"):
        super().__init__(msg)


class ParseError(BarshError):
    """Unbalanced quoting in the finalized command."""


class EmptyCommand(BarshError):
    def __init__(self, msg="command is empty"):
        super().__init__(msg)


class SpawnError(BarshError):
    pass
