"""Operations over payment models: parse, build, patch and narrow."""

from .patching import apply_patch
from .request_builder import build_request
from .resource_parser import dispatch, narrow, parse_document, parse_resource

__all__ = [
    "apply_patch",
    "build_request",
    "dispatch",
    "narrow",
    "parse_document",
    "parse_resource",
]
