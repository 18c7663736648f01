import re
from typing import Any, Callable


MASK = '********'

SENSITIVE_KEYWORDS = frozenset(
    {'password', 'hashed_password', 'token', 'secret_key', 'credentials'}
)

# password='x', token=abc, "secret_key": "x" inside a repr
_SENSITIVE_PATTERN = re.compile(
    r'(\b(?:' + '|'.join(sorted(SENSITIVE_KEYWORDS)) + r'))(\s*[=:]\s*)(["\']?)[^"\',)\s]+\3',
    re.IGNORECASE,
)


def describe_call_target(func: Callable[..., Any]) -> str:
    """`reserve_tickets_use_case.ReserveTicketsUseCase.reserve`"""
    module = getattr(func, '__module__', '') or ''
    return f'{module.rsplit(".", 1)[-1]}.{func.__qualname__}'


def mask_sensitive(data: Any) -> Any:
    """Mask `password=...` style fragments in the repr of entities and requests."""
    data_str = str(data)
    new_data_str = _SENSITIVE_PATTERN.sub(rf"\1\2'{MASK}'", data_str)
    return data if data_str == new_data_str else new_data_str


def should_mask_keyword(keyword: Any, value: Any) -> Any:
    return MASK if keyword in SENSITIVE_KEYWORDS else value


def truncate_content(data: Any, max_length: int = 500) -> Any:
    data_str = str(data)
    if len(data_str) <= max_length:
        return data
    return f'{data_str[:max_length]}... (truncated {len(data_str) - max_length} chars)'


def masked(data: Any, *, truncate: bool = True) -> Any:
    if isinstance(data, dict):
        cleaned: Any = {
            key: masked(should_mask_keyword(key, value), truncate=False)
            for key, value in data.items()
        }
    elif isinstance(data, list | tuple):
        items = [masked(item, truncate=False) for item in data]
        cleaned = tuple(items) if isinstance(data, tuple) else items
    else:
        cleaned = mask_sensitive(data)
    return truncate_content(cleaned) if truncate else cleaned
