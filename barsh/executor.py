import logging
import shlex
import subprocess
from typing import List

from barsh.errors import EmptyCommand, ParseError, SpawnError
from barsh.hooks import overridable

log = logging.getLogger(__name__)


def split_command(command: str) -> List[str]:
    try:
        argv = shlex.split(command)
    except ValueError as e:
        raise ParseError(f"could not parse command: {e}") from e
    if not argv:
        raise EmptyCommand()
    return argv


@overridable
def spawn_process(argv: List[str]):
    '''
    Starts argv and returns right away.
    The child inherits our environment and stdin/stdout/stderr.
    '''
    return subprocess.Popen(argv)


def execute(command: str):
    argv = split_command(command)
    log.info("executing %r", argv)
    try:
        return spawn_process(argv)
    except OSError as e:
        # missing executable, permission denied, ...
        raise SpawnError(f"command failed to start: {argv[0]}: {e.strerror or e}") from e
    except ValueError as e:
        # embedded null byte
        raise SpawnError(f"command failed to start: {e}") from e
