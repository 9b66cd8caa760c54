import argparse
import logging
import os
import sys

from barsh import __version__, hooks
from barsh.app import App
from barsh.config import LOG_LEVELS, Settings, configure_logging
from barsh.errors import BarshError
from barsh.executor import execute
from barsh.llm import ENDPOINTS, api_key_for, invoke_llm, resolve_endpoint
from barsh.prompt import build_messages

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="barsh",
        description="Ask for a shell command in plain language, then pick, edit and run one.",
    )
    p.add_argument("-l", "--endpoint", metavar="ENDPOINT",
                   help=f"completion endpoint: {', '.join(ENDPOINTS)} (or its first letter)")
    p.add_argument("-m", "--model", help="model name, defaults to the endpoint's default")
    p.add_argument("--max-response-chars", type=int, dest="max_response_chars",
                   help="abort if the response grows past this many characters")
    p.add_argument("--plugin-dir", dest="plugin_dir", help="directory of plugin files (default .barsh)")
    p.add_argument("--log-file", dest="log_file", help="write logs to this file")
    p.add_argument("--log-level", dest="log_level", type=str.upper, choices=LOG_LEVELS)
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("query", nargs="*", help="the question, e.g. `list all files`")
    return p


def run(settings: Settings, backend=None) -> int:
    # before blessed gets imported, see BlessedBackend
    os.environ.setdefault('ESCDELAY', str(settings.escdelay))

    hooks.load_plugins(settings.plugin_dir)
    if not hooks.is_overridden("invoke_llm"):
        api_key_for(resolve_endpoint(settings.endpoint))  # fail before taking over the screen

    if backend is None:
        from barsh.terminal import BlessedBackend
        backend = BlessedBackend(esc_delay=settings.escdelay / 1000)

    chunks = invoke_llm(settings, build_messages(settings.query))
    command = App(backend, chunks, settings.max_response_chars).run()
    if command is None:
        return 0
    execute(command)
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = Settings.from_args(args)
        configure_logging(settings)
        return run(settings)
    except BarshError as e:
        log.error("%s: %s", type(e).__name__, e)
        print(f"barsh: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
