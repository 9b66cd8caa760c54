import functools
import glob
import logging
import os

log = logging.getLogger(__name__)


# name -> current implementation of every overridable seam
OVERRIDES = {}
_OVERRIDDEN = set()


def overridable(fn):
    '''
    Marks `fn` as a seam plugins can swap out.
    Callers keep calling the returned wrapper; it looks the implementation up on every call.
    '''
    OVERRIDES[fn.__name__] = fn

    @functools.wraps(fn)
    def dispatch(*a, **ka):
        return OVERRIDES[fn.__name__](*a, **ka)
    return dispatch


def override(fn):
    '''
    used like:

    @barsh.override
    def invoke_llm(settings, messages):
        yield "ls -la\\n"
    '''
    name = fn.__name__
    if name not in OVERRIDES:
        raise RuntimeError(f"'{name}' not overridable (known: {', '.join(sorted(OVERRIDES))})")
    if name in _OVERRIDDEN:
        raise RuntimeError(f"'{name}' already overridden")
    _OVERRIDDEN.add(name)
    OVERRIDES[name] = fn
    log.info("override installed for %s", name)
    return fn


def is_overridden(name: str) -> bool:
    return name in _OVERRIDDEN


def snapshot():
    return dict(OVERRIDES), set(_OVERRIDDEN)


def restore(snap):
    impls, overridden = snap
    OVERRIDES.clear()
    OVERRIDES.update(impls)
    _OVERRIDDEN.clear()
    _OVERRIDDEN.update(overridden)



def load_plugins(plugin_dir):
    '''Runs every plugin file in `plugin_dir`; returns the paths it ran.'''
    if not plugin_dir or not os.path.isdir(plugin_dir):
        log.debug("no plugin dir at %r", plugin_dir)
        return []
    loaded = []
    for path in sorted(glob.glob(os.path.join(plugin_dir, "*.py"))):
        # `_name.py` files are kept around but never run
        if os.path.basename(path).startswith("_"):
            continue
        with open(path, "r", encoding="utf-8") as f:
            code = compile(f.read(), path, "exec")
        exec(code, {"__name__": "__plugin__", "__file__": path})
        log.info("loaded plugin %s", path)
        loaded.append(path)
    return loaded
