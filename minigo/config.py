from __future__ import annotations
import os


def str_from_env(var: str, default: str) -> str:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def get_default_entrypoint() -> str:
    return str_from_env('MINIGO_ENTRYPOINT', 'main')


def get_main_package() -> str:
    return str_from_env('MINIGO_MAIN_PACKAGE', 'main')


def get_std_prefix() -> str:
    # fully qualified host packages live under this prefix, e.g. minigo/std/fmt
    prefix = str_from_env('MINIGO_STD_PREFIX', 'minigo/std/')
    return prefix if prefix.endswith('/') else prefix + '/'


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def get_max_call_depth() -> int:
    # each script call costs several Python frames; keep well under the interpreter limit
    return max(1, int_from_env('MINIGO_MAX_CALL_DEPTH', 64))
