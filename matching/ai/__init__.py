from .counsellor import (
    Counsellor,
    CounsellorUnavailable,
    CounsellorResponseError,
    CounsellorProviderError,
    parse_task_payload,
)

__all__ = [
    "Counsellor",
    "CounsellorUnavailable",
    "CounsellorResponseError",
    "CounsellorProviderError",
    "parse_task_payload",
]
