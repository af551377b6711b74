import re
from typing import Optional

def clean_text(s: Optional[str]) -> Optional[str]:
    if not s:
        return s
    s = re.sub(r"\s+", " ", s).strip()
    return s

def truncate(s: str, limit: int) -> str:
    return s if len(s) <= limit else s[:limit]
