import time
from typing import Any, Callable

from pydantic import BaseModel, SecretStr

from src.platform.logging.loguru_io_config import (
    SENSITIVE_KEYWORDS,
    call_depth_var,
    chain_start_time_var,
)


MASK = '******'
MAX_CONTENT_LENGTH = 600


def build_call_target_func_path(func: Callable[..., Any]) -> str:
    module = func.__module__.removeprefix('src.')
    return f'{module}:{func.__qualname__}'


def get_chain_start_time() -> str:
    """Elapsed time since the outermost decorated call of the current chain started."""
    now = time.perf_counter()
    if call_depth_var.get() <= 1 or not chain_start_time_var.get():
        chain_start_time_var.set(now)
    return f'chain +{now - chain_start_time_var.get():.4f}s'


def reset_call_depth() -> None:
    depth = max(0, call_depth_var.get() - 1)
    call_depth_var.set(depth)
    if depth == 0:
        chain_start_time_var.set(0)


def should_mask_keyword(key: Any, value: Any) -> Any:
    if isinstance(key, str) and any(word in key.lower() for word in SENSITIVE_KEYWORDS):
        return MASK
    return value


def mask_sensitive(data: Any) -> Any:
    if isinstance(data, SecretStr):
        return MASK
    if isinstance(data, BaseModel):
        return {
            key: should_mask_keyword(key, value) for key, value in data.model_dump().items()
        }
    return data


def truncate_content(data: Any) -> Any:
    if isinstance(data, (int, float, bool)) or data is None:
        return data
    text = str(data)
    if len(text) <= MAX_CONTENT_LENGTH:
        return data
    return f'{text[:MAX_CONTENT_LENGTH]}...<{len(text) - MAX_CONTENT_LENGTH} more chars>'
