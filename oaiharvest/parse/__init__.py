from .response import OAI_NAMESPACE, child_text, decode_response, extract_error, extract_granularity, find_child

__all__ = [
    "OAI_NAMESPACE",
    "child_text",
    "decode_response",
    "extract_error",
    "extract_granularity",
    "find_child",
]
