"""
Globals -- Predefined names per execution environment

Data tables seeding the ambient scope. Built-in ECMAScript globals are
always present; the others are enabled through the "env" config section.

Usage:
    from blockscope.core.globals import environment_globals

    names = environment_globals({"browser": True, "node": False})
"""

import re
from typing import Dict, FrozenSet, Iterable, List, Mapping, Set


BUILTIN: FrozenSet[str] = frozenset({
    # Values
    "Infinity", "NaN", "undefined", "globalThis",
    # Functions
    "eval", "isFinite", "isNaN", "parseFloat", "parseInt",
    "decodeURI", "decodeURIComponent", "encodeURI", "encodeURIComponent",
    "escape", "unescape",
    # Constructors and namespaces
    "Object", "Function", "Boolean", "Symbol", "Error", "EvalError",
    "RangeError", "ReferenceError", "SyntaxError", "TypeError", "URIError",
    "AggregateError", "Number", "BigInt", "Math", "Date", "String", "RegExp",
    "Array", "Int8Array", "Uint8Array", "Uint8ClampedArray", "Int16Array",
    "Uint16Array", "Int32Array", "Uint32Array", "Float32Array",
    "Float64Array", "BigInt64Array", "BigUint64Array", "Map", "Set",
    "WeakMap", "WeakSet", "WeakRef", "FinalizationRegistry", "ArrayBuffer",
    "SharedArrayBuffer", "DataView", "Atomics", "JSON", "Promise", "Proxy",
    "Reflect", "Intl",
})

BROWSER: FrozenSet[str] = frozenset({
    "window", "self", "document", "navigator", "location", "history",
    "screen", "console", "alert", "confirm", "prompt", "fetch",
    "XMLHttpRequest", "WebSocket", "Worker", "Blob", "File", "FileReader",
    "FormData", "URL", "URLSearchParams", "Headers", "Request", "Response",
    "Event", "CustomEvent", "EventTarget", "Node", "Element", "HTMLElement",
    "Image", "localStorage", "sessionStorage", "indexedDB", "performance",
    "requestAnimationFrame", "cancelAnimationFrame", "setTimeout",
    "clearTimeout", "setInterval", "clearInterval", "queueMicrotask",
    "atob", "btoa", "crypto", "MutationObserver", "IntersectionObserver",
    "ResizeObserver", "getComputedStyle", "matchMedia", "structuredClone",
})

NODE: FrozenSet[str] = frozenset({
    "require", "module", "exports", "__dirname", "__filename", "process",
    "Buffer", "global", "console", "setTimeout", "clearTimeout",
    "setInterval", "clearInterval", "setImmediate", "clearImmediate",
    "queueMicrotask", "URL", "URLSearchParams", "TextEncoder",
    "TextDecoder", "structuredClone",
})

COMMONJS: FrozenSet[str] = frozenset({"require", "module", "exports"})

WORKER: FrozenSet[str] = frozenset({
    "self", "postMessage", "importScripts", "onmessage", "close",
    "console", "fetch", "setTimeout", "clearTimeout", "setInterval",
    "clearInterval",
})

JEST: FrozenSet[str] = frozenset({
    "describe", "it", "test", "expect", "beforeAll", "beforeEach",
    "afterAll", "afterEach", "jest", "fit", "xit", "xdescribe", "xtest",
})

MOCHA: FrozenSet[str] = frozenset({
    "describe", "it", "context", "specify", "before", "beforeEach",
    "after", "afterEach", "suite", "test", "setup", "teardown", "mocha",
    "run",
})

ENVIRONMENTS: Dict[str, FrozenSet[str]] = {
    "builtin": BUILTIN,
    "browser": BROWSER,
    "node": NODE,
    "commonjs": COMMONJS,
    "worker": WORKER,
    "jest": JEST,
    "mocha": MOCHA,
}


def known_environments() -> Iterable[str]:
    """Names accepted in the "env" config section."""
    return sorted(name for name in ENVIRONMENTS if name != "builtin")


def environment_globals(env: Mapping[str, bool]) -> Set[str]:
    """
    Collect globals for the enabled environments.

    Args:
        env: Mapping of environment name -> enabled flag

    Returns:
        Built-in globals plus those of every enabled environment

    Raises:
        KeyError: If an enabled environment is unknown
    """
    names: Set[str] = set(BUILTIN)
    for env_name, enabled in env.items():
        if not enabled:
            continue
        if env_name not in ENVIRONMENTS:
            raise KeyError(env_name)
        names.update(ENVIRONMENTS[env_name])
    return names


_GLOBAL_DIRECTIVE = re.compile(r"^\s*globals?\s+(.*)$", re.DOTALL)


def parse_global_comment(text: str) -> List[str]:
    """
    Names declared by a /* global ... */ block comment.

    Accepts "global" and "globals", comma or whitespace separated
    entries, and ESLint-style ":true"/":false"/":writable" suffixes,
    which are ignored since only the name matters for resolution.

    Args:
        text: Comment text including its delimiters

    Returns:
        Declared names in comment order (empty for other comments)
    """
    if not text.startswith("/*"):
        return []
    body = text[2:-2] if text.endswith("*/") else text[2:]
    match = _GLOBAL_DIRECTIVE.match(body)
    if not match:
        return []

    names: List[str] = []
    for entry in re.split(r"[\s,]+", match.group(1)):
        name = entry.split(":", 1)[0].strip()
        if name:
            names.append(name)
    return names
