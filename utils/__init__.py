# Utility modules for the margin engine
from .sanitizer import (
    sanitize_text, sanitize_name, sanitize_tags, sanitize_scope, safe_float
)
