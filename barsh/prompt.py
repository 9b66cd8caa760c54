import logging
import sys

import psutil

log = logging.getLogger(__name__)


SYSTEM_PROMPT = """Act as a natural language to {shell} command translation engine on {os}.

You are an expert in {shell} on {os} and translate the question at the end to valid syntax.

The user will ask a question. Answer with at least 5 and at most 10 unique and different {shell} command options.

Every answer must be a valid {shell} command.

Output plain text that can be parsed without adjustments, one command per line, like this:
command1
command2
command3

Only return plain text. No numbering, no explanations, no code fences."""


def detect_shell(default: str = "bash") -> str:
    '''Name of the process that started us, which is usually the shell.'''
    try:
        name = psutil.Process().parent().name()
    except (psutil.Error, AttributeError) as e:
        # parent() is None when the parent is already gone
        log.debug("shell detection failed: %s", e)
        return default
    if name.endswith(".exe"): name = name[:-4]
    if name.startswith("-"): name = name[1:]  # login shells
    return name or default


def os_name() -> str:
    if sys.platform.startswith("linux"): return "linux"
    if sys.platform == "darwin": return "macos"
    if sys.platform in ("win32", "cygwin"): return "windows"
    return sys.platform


def build_messages(query: str, shell=None, os=None) -> list:
    system = SYSTEM_PROMPT.format(shell=shell or detect_shell(), os=os or os_name())
    return [
        {"role": "system", "content": system},
        {"role": "user", "content": query},
    ]
